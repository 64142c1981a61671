"""bzlint CLI: Clippy on save for Rust files in Bazel workspaces.

Point the editor's check command at ``bzlint $saved_file``. For VS Code
with rust-analyzer::

    "rust-analyzer.check.overrideCommand": ["bzlint", "$saved_file"]
"""

import logging
import shlex
from pathlib import Path

import typer

from bzlint import __version__

from .config import LintMode, find_config, load_config, write_config_template
from .constants import LOCK_FILE_ENV, TERMINATE_TIMEOUT
from .core import (
    RunGuard,
    build_lint_command,
    describe_lint,
    find_workspace_root,
    relative_path,
    validate_file,
)
from .errors import BzlintError, ConfigError, ValidationError
from .logging import configure_logging
from .output import OutputContext, make_console
from .services import query_target, run_build

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"bzlint {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="bzlint",
    help="Run Clippy through Bazel on a single Rust file",
    add_completion=False,
)


def lint_file(
    ctx: OutputContext,
    file_path: Path,
    config_path: Path | None = None,
    mode: LintMode | None = None,
) -> int:
    """Resolve a validated file to its Bazel target and lint it.

    Returns:
        Exit code of the bazel build (0 for a dry run)

    Raises:
        BzlintError: If the workspace, config or target cannot be resolved
    """
    workspace_root = find_workspace_root(file_path)
    logger.debug("Workspace root: %s", workspace_root)

    config = load_config(config_path or find_config(workspace_root))
    mode = mode or config.mode

    rel_path = relative_path(file_path, workspace_root)
    target = query_target(
        rel_path,
        cwd=workspace_root,
        exec_path=config.bazel.exec,
        timeout=config.bazel.query_timeout,
    )

    cmd = build_lint_command(mode, target, config.clippy, exec_path=config.bazel.exec)
    if ctx.dry_run:
        ctx.console.print(shlex.join(cmd), markup=False)
        return 0

    ctx.print(describe_lint(mode, target))
    return run_build(cmd, cwd=workspace_root)


@app.command()
def main(
    file: str | None = typer.Argument(
        None,
        help="Rust source file to lint",
        show_default=False,
    ),
    mode: LintMode | None = typer.Option(
        None,
        "--mode",
        "-m",
        help="Lint mode (default: from config, else json-pedantic)",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: .bzlint.toml in the workspace root)",
    ),
    lock_file: Path | None = typer.Option(
        None,
        "--lock-file",
        envvar=LOCK_FILE_ENV,
        help="Lock file shared by runs (default: bzlint.lock in the temp directory)",
    ),
    terminate_timeout: float = typer.Option(
        TERMINATE_TIMEOUT,
        "--terminate-timeout",
        min=0,
        help="Seconds to wait for a cancelled run before killing it",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the bazel build command instead of running it",
    ),
    write_config: Path | None = typer.Option(
        None,
        "--write-config",
        help="Write a config template to this path and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Lint FILE with Clippy, cancelling any lint still running."""
    configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color)
    ctx = OutputContext(console=make_console(no_color), quiet=quiet, dry_run=dry_run)

    if write_config is not None:
        path = write_config_template(write_config)
        ctx.success(f"Created config template: {path}")
        return

    try:
        file_path = validate_file(file)
    except ValidationError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    guard = RunGuard(lock_path=lock_file, file=file_path, terminate_timeout=terminate_timeout)
    try:
        with guard:
            exit_code = lint_file(ctx, file_path, config_path=config_path, mode=mode)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(2) from None
    except BzlintError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    if exit_code != 0:
        raise typer.Exit(exit_code)
