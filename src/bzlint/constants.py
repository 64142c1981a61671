"""Constants for bzlint."""

# Files that mark the root of a Bazel workspace
MARKER_FILES = ("WORKSPACE", "WORKSPACE.bazel", "MODULE.bazel")

RUST_EXTENSION = ".rs"

CONFIG_FILE = ".bzlint.toml"
LOCK_FILE = "bzlint.lock"
LOCK_FILE_ENV = "BZLINT_LOCK_FILE"

# Subprocess timeouts (seconds)
BAZEL_QUERY_TIMEOUT = 120
TERMINATE_TIMEOUT = 10.0  # Wait for a cancelled run before escalating to SIGKILL
KILL_TIMEOUT = 2.0
BUILD_TERMINATE_GRACE = 5  # Grace period for the bazel client on interruption

LIVENESS_POLL_INTERVAL = 0.05

# rules_rust integration
CLIPPY_ASPECT = "@rules_rust//rust:defs.bzl%rust_clippy_aspect"
CLIPPY_OUTPUT_GROUP = "clippy_checks"
ERROR_FORMAT = "json"
PEDANTIC_FLAGS = ["-Wclippy::pedantic"]
DEFAULT_CLIPPY_FLAGS = [
    "-Wclippy::pedantic",
    "-Dclippy::perf",
    "-Dclippy::correctness",
    "-Wclippy::suspicious",
    "-Dclippy::complexity",
    "-Dclippy::style",
    "-Aclippy::missing_errors_doc",
    "-Aclippy::missing_panics_doc",
    "-Aclippy::semicolon_if_nothing_returned",
]
