"""bzlint: run Clippy through Bazel for a single saved Rust file."""

__version__ = "0.1.0"
