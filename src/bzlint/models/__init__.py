"""Data models for bzlint."""

from .lock import LockRecord

__all__ = ["LockRecord"]
