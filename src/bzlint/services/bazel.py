"""Bazel integration for bzlint."""

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import TextIO

from ..constants import BAZEL_QUERY_TIMEOUT, BUILD_TERMINATE_GRACE
from ..errors import BazelError, TargetNotFoundError

logger = logging.getLogger(__name__)


def query_target(
    relative_path: str,
    cwd: Path,
    exec_path: str = "bazel",
    timeout: int | None = None,
) -> str:
    """Resolve a workspace-relative file path to its Bazel target label.

    Args:
        relative_path: File path relative to the workspace root
        cwd: Workspace root
        exec_path: Path to bazel executable
        timeout: Optional timeout in seconds (default: BAZEL_QUERY_TIMEOUT)

    Returns:
        The first label printed by ``bazel query``

    Raises:
        TargetNotFoundError: If the query fails or prints nothing
        BazelError: If bazel is missing or times out
    """
    timeout = timeout or BAZEL_QUERY_TIMEOUT
    cmd = [exec_path, "query", relative_path]
    logger.debug("Running %s in %s", shlex.join(cmd), cwd)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise BazelError(f"bazel query timed out after {timeout} seconds") from e
    except FileNotFoundError:
        raise BazelError(f"Bazel executable not found: {exec_path}") from None

    target = next((line.strip() for line in result.stdout.splitlines() if line.strip()), "")
    if result.returncode != 0 or not target:
        if result.stderr.strip():
            logger.debug("bazel query stderr:\n%s", result.stderr.rstrip())
        raise TargetNotFoundError(
            f"Could not find a build target for {relative_path}. "
            "Ensure the file is mentioned in a BUILD.bazel script."
        )
    return target


def run_build(cmd: list[str], cwd: Path, stream: TextIO | None = None) -> int:
    """Run a bazel build, copying its output to stdout as it arrives.

    stderr is merged into stdout so editor integrations reading stdout see
    the compiler diagnostics. If this process is interrupted, the bazel
    client is terminated before the exception propagates.

    Args:
        cmd: Full command including the bazel executable
        cwd: Workspace root
        stream: Where to copy output (default: sys.stdout at call time)

    Returns:
        Bazel's exit code

    Raises:
        BazelError: If the bazel executable cannot be started
    """
    logger.debug("Running %s in %s", shlex.join(cmd), cwd)
    try:
        process = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            bufsize=1,  # Line buffered
        )
    except FileNotFoundError:
        raise BazelError(f"Bazel executable not found: {cmd[0]}") from None

    assert process.stdout is not None
    out = stream or sys.stdout

    try:
        for line in process.stdout:
            out.write(line)
            out.flush()
        return process.wait()
    finally:
        # Ensure bazel is stopped on any exception (including SystemExit from SIGTERM)
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=BUILD_TERMINATE_GRACE)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        process.stdout.close()
