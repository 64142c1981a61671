"""Tests for input file validation."""

from pathlib import Path

import pytest

from bzlint.core.validation import validate_file
from bzlint.errors import ValidationError


class TestValidateFile:
    """Tests for validate_file function."""

    def test_missing_argument(self) -> None:
        """None is rejected with the no-file message."""
        with pytest.raises(ValidationError, match="No file specified"):
            validate_file(None)

    def test_empty_argument(self) -> None:
        """An empty string counts as no file."""
        with pytest.raises(ValidationError, match="No file specified"):
            validate_file("")

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        """Paths that do not exist are rejected."""
        with pytest.raises(ValidationError, match="does not exist"):
            validate_file(tmp_path / "missing.rs")

    def test_wrong_extension(self, workspace: Path) -> None:
        """Non-Rust files are rejected."""
        with pytest.raises(ValidationError, match=r"does not have a \.rs extension"):
            validate_file(workspace / "src" / "notes.txt")

    def test_returns_resolved_absolute_path(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative paths are resolved against the working directory."""
        monkeypatch.chdir(workspace)
        result = validate_file("src/../src/lib.rs")
        assert result == (workspace / "src" / "lib.rs").resolve()
        assert result.is_absolute()

    def test_symlink_resolved_before_extension_check(self, workspace: Path) -> None:
        """A link named .txt pointing at a .rs file is accepted."""
        link = workspace / "link.txt"
        link.symlink_to(workspace / "src" / "lib.rs")
        assert validate_file(link) == (workspace / "src" / "lib.rs").resolve()

    def test_does_not_write(self, workspace: Path) -> None:
        """Validation leaves the filesystem untouched."""
        before = sorted(p.name for p in workspace.rglob("*"))
        validate_file(workspace / "src" / "lib.rs")
        assert sorted(p.name for p in workspace.rglob("*")) == before
