"""Shared test fixtures for bzlint tests."""

import shlex
import subprocess
import threading
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import tomli_w
from typer.testing import CliRunner

FakeBazel = Callable[..., Path]


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script."""
    path.write_text(f"#!/bin/sh\n{body}")
    path.chmod(0o755)
    return path


@pytest.fixture
def shell_script(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing an executable script named bazel into tmp_path."""

    def _make(body: str) -> Path:
        return write_script(tmp_path / "bazel", body)

    return _make


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a Bazel workspace with one Rust file.

    Layout: ws/MODULE.bazel, ws/src/lib.rs, ws/src/notes.txt
    """
    ws = tmp_path / "ws"
    (ws / "src").mkdir(parents=True)
    (ws / "MODULE.bazel").write_text('module(name = "ws")\n')
    (ws / "src" / "lib.rs").write_text("pub fn add(a: i32, b: i32) -> i32 { a + b }\n")
    (ws / "src" / "notes.txt").write_text("not rust\n")
    return ws


@pytest.fixture
def lock_path(tmp_path: Path) -> Path:
    """Lock file location private to the test."""
    return tmp_path / "locks" / "bzlint.lock"


@pytest.fixture
def bazel_log(tmp_path: Path) -> Path:
    """File the fake bazel appends its arguments to, one invocation per line."""
    return tmp_path / "bazel.log"


@pytest.fixture
def fake_bazel(tmp_path: Path, bazel_log: Path) -> FakeBazel:
    """Factory for a fake bazel executable.

    ``bazel query`` prints ``query_output`` and exits with ``query_exit``;
    every other command prints its arguments and exits with ``build_exit``.
    """

    def _make(query_output: str = "//src:lib.rs", query_exit: int = 0, build_exit: int = 0) -> Path:
        printed = f"printf '%s\\n' {shlex.quote(query_output)}" if query_output else ":"
        body = f"""echo "$@" >> {shlex.quote(str(bazel_log))}
if [ "$1" = "query" ]; then
    {printed}
    exit {query_exit}
fi
echo "fake bazel $*"
echo "fake bazel stderr" >&2
exit {build_exit}
"""
        return write_script(tmp_path / "bazel", body)

    return _make


@pytest.fixture
def configured_workspace(workspace: Path, fake_bazel: FakeBazel) -> Path:
    """Workspace whose .bzlint.toml points at the default fake bazel."""
    script = fake_bazel()
    (workspace / ".bzlint.toml").write_text(tomli_w.dumps({"bazel": {"exec": str(script)}}))
    return workspace


@pytest.fixture
def dead_pid() -> int:
    """PID of a process that has already exited and been reaped."""
    proc = subprocess.Popen(["true"])
    proc.wait()
    return proc.pid


@pytest.fixture
def sleeper() -> Generator[subprocess.Popen, None, None]:
    """A live process standing in for a previous lint run.

    A background thread reaps it as soon as it exits so its PID does not
    linger as a zombie.
    """
    proc = subprocess.Popen(["sleep", "60"])
    reaper = threading.Thread(target=proc.wait, daemon=True)
    reaper.start()
    try:
        yield proc
    finally:
        if proc.poll() is None:
            proc.kill()
        reaper.join(timeout=5)
