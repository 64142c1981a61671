"""Bazel workspace discovery.

Bazel addresses files relative to the workspace root, which is the
nearest ancestor holding one of the marker files.
"""

from collections.abc import Iterable
from pathlib import Path, PurePath

from ..constants import MARKER_FILES
from ..errors import WorkspaceError


def find_workspace_root(path: Path, markers: Iterable[str] = MARKER_FILES) -> Path:
    """Find the nearest ancestor directory containing a marker file.

    The filesystem root is never considered a workspace.

    Args:
        path: Absolute path to a file or directory inside the workspace
        markers: Marker file names to look for

    Returns:
        The workspace root directory

    Raises:
        WorkspaceError: If no ancestor contains a marker file
    """
    markers = tuple(markers)
    directory = path if path.is_dir() else path.parent

    while directory != directory.parent:
        if any((directory / marker).is_file() for marker in markers):
            return directory
        directory = directory.parent

    raise WorkspaceError(
        f"No Bazel project detected containing {path}. "
        "Ensure you are inside a Bazel workspace."
    )


def relative_path(file: PurePath, workspace_root: PurePath) -> str:
    """Return the file path relative to the workspace root, POSIX style.

    Raises:
        WorkspaceError: If the file is not inside the workspace root
    """
    try:
        return file.relative_to(workspace_root).as_posix()
    except ValueError:
        raise WorkspaceError(f"{file} is not inside workspace {workspace_root}") from None
