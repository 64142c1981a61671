"""Errors raised by bzlint."""


class BzlintError(Exception):
    """Base exception for bzlint errors."""


class ValidationError(BzlintError):
    """Raised when the input file cannot be linted."""


class WorkspaceError(BzlintError):
    """Raised when no Bazel workspace contains the input file."""


class ConfigError(BzlintError):
    """Raised when the configuration file is invalid."""


class BazelError(BzlintError):
    """Bazel invocation failed."""


class TargetNotFoundError(BazelError):
    """Raised when bazel query resolves no target for a file."""


class RunGuardError(BzlintError):
    """Error reading or writing the run lock record."""
