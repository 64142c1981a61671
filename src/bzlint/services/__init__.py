"""External tool integrations for bzlint.

- bazel: target queries and lint builds
"""

from .bazel import query_target, run_build

__all__ = ["query_target", "run_build"]
