"""Input file validation."""

from pathlib import Path

from ..constants import RUST_EXTENSION
from ..errors import ValidationError


def validate_file(file: str | Path | None) -> Path:
    """Check that a file argument names an existing Rust source file.

    Args:
        file: File argument as given on the command line

    Returns:
        Absolute path to the file with symlinks resolved

    Raises:
        ValidationError: If no file was given, it does not exist or it is
            not a ``.rs`` file
    """
    if file is None or str(file) == "":
        raise ValidationError("No file specified. Please specify a Rust file to lint.")

    path = Path(file).resolve()
    if not path.exists():
        raise ValidationError(f"File '{path}' does not exist, so it cannot be linted.")
    if path.suffix != RUST_EXTENSION:
        raise ValidationError(
            f"File '{path}' does not have a {RUST_EXTENSION} extension. "
            "Please specify a Rust file."
        )
    return path
