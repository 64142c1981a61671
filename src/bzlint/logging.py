"""Logging setup for bzlint.

Log records are rendered on stderr. stdout carries status lines and the
diagnostics Bazel streams back to the editor, so nothing logged may land
there.
"""

import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler


def _level_for(verbosity: int, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbosity >= 1 else logging.INFO


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Route bzlint log records to a Rich handler.

    ``-q`` wins over ``-v``. One ``-v`` enables debug records (commands run,
    lock record contents, signals sent); ``-vv`` also shows timestamps and
    source locations.

    Returns:
        The console log records are rendered on
    """
    level = _level_for(verbosity, quiet)
    console = Console(
        file=stream or sys.stderr,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )
    handler = RichHandler(
        console=console,
        show_time=verbosity >= 2,
        show_path=verbosity >= 2,
    )

    logging.basicConfig(level=level, format="%(message)s", handlers=[handler])
    logging.getLogger("bzlint").setLevel(level)
    return console
