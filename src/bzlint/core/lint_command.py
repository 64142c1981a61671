"""Bazel command lines for each lint mode."""

from ..config import ClippyConfig, LintMode
from ..constants import PEDANTIC_FLAGS


def _aspect_args(clippy: ClippyConfig) -> list[str]:
    args = []
    if clippy.aspect:
        args.append(f"--aspects={clippy.aspect}")
    args.append(f"--output_groups=+{clippy.output_group}")
    return args


def _clippy_flags_arg(flags: list[str]) -> str:
    # rules_rust takes the whole lint list as one comma separated value
    return "--@rules_rust//:clippy_flags=" + ",".join(flags)


def _error_format_arg(clippy: ClippyConfig) -> str:
    return f"--@rules_rust//:error_format={clippy.error_format}"


def build_lint_args(mode: LintMode, target: str, clippy: ClippyConfig) -> list[str]:
    """Build the ``bazel build`` arguments for a lint mode.

    Args:
        mode: Lint mode to run
        target: Bazel target label resolved for the file
        clippy: Clippy integration settings

    Returns:
        Arguments following the bazel executable, ending with the target
    """
    args = ["build"]

    if mode == LintMode.BASIC:
        pass
    elif mode == LintMode.CLIPPY:
        args.extend(_aspect_args(clippy))
    elif mode == LintMode.FILE:
        args.append("--compile_one_dependency")
    elif mode == LintMode.JSON_FILE:
        args.extend(["--compile_one_dependency", _error_format_arg(clippy)])
    elif mode == LintMode.PEDANTIC:
        args.extend(_aspect_args(clippy))
        args.append(_clippy_flags_arg(PEDANTIC_FLAGS))
    elif mode == LintMode.SLIGHTLY_PEDANTIC:
        args.extend(_aspect_args(clippy))
        args.append(_clippy_flags_arg(clippy.flags))
    elif mode == LintMode.JSON_PEDANTIC:
        if clippy.aspect:
            args.append(f"--aspects={clippy.aspect}")
        args.extend(
            [
                "--compile_one_dependency",
                _error_format_arg(clippy),
                f"--output_groups=+{clippy.output_group}",
                _clippy_flags_arg(clippy.flags),
            ]
        )
    else:
        raise ValueError(f"Unknown lint mode: {mode}")

    args.append(target)
    return args


def build_lint_command(
    mode: LintMode,
    target: str,
    clippy: ClippyConfig,
    exec_path: str = "bazel",
) -> list[str]:
    """Build the full Bazel command for a lint mode."""
    return [exec_path, *build_lint_args(mode, target, clippy)]


def describe_lint(mode: LintMode, target: str) -> str:
    """Status line announcing a lint run."""
    if mode == LintMode.BASIC:
        return f"Linting Bazel target {target}..."
    if mode == LintMode.CLIPPY:
        return f"Looking for stylistic issues in Bazel target {target}..."
    if mode == LintMode.JSON_FILE:
        return f"Linting target {target}..."
    if mode == LintMode.PEDANTIC:
        return f"Pedantically linting Bazel target {target}..."
    if mode == LintMode.SLIGHTLY_PEDANTIC:
        return f"Slightly pedantically linting Bazel target {target}..."
    return f"Linting Bazel file target {target}..."
