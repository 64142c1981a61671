"""Core logic for bzlint.

This package contains the logic between the CLI and Bazel:
- validation: Input file checks
- workspace: Workspace root discovery and relative paths
- lint_command: Bazel command lines per lint mode
- run_guard: Single-instance guard cancelling previous runs
"""

from .lint_command import build_lint_args, build_lint_command, describe_lint
from .run_guard import (
    RunGuard,
    default_lock_path,
    read_lock_record,
    terminate_process,
    write_lock_record,
)
from .validation import validate_file
from .workspace import find_workspace_root, relative_path

__all__ = [
    "RunGuard",
    "build_lint_args",
    "build_lint_command",
    "default_lock_path",
    "describe_lint",
    "find_workspace_root",
    "read_lock_record",
    "relative_path",
    "terminate_process",
    "validate_file",
    "write_lock_record",
]
