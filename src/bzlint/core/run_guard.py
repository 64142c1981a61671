"""Single-instance guard for lint runs.

Editors fire a check on every save, and a Bazel build can take several
seconds. Only the newest run is useful, so a new run terminates the run
named in the lock record, waits for it to exit, and takes the record over.

The record is rewritten atomically (write to a sibling, then rename) so two
near-simultaneous runs never leave a torn record. PID reuse by an unrelated
process is not detected: a record naming a live PID is always treated as a
previous run.
"""

import contextlib
import logging
import os
import signal
import tempfile
import threading
import time
from pathlib import Path
from types import FrameType
from typing import Any

from pydantic import ValidationError

from ..constants import KILL_TIMEOUT, LIVENESS_POLL_INTERVAL, LOCK_FILE, TERMINATE_TIMEOUT
from ..errors import RunGuardError
from ..models import LockRecord

logger = logging.getLogger(__name__)

# Signals that end a run and must still remove the lock record
_EXIT_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig
)


def default_lock_path() -> Path:
    """Lock file location in the system temp directory."""
    return Path(tempfile.gettempdir()) / LOCK_FILE


def _is_zombie(pid: int) -> bool:
    """Check /proc for an exited but unreaped process (Linux only)."""
    try:
        stat = Path(f"/proc/{pid}/stat").read_text()
    except OSError:
        return False
    # Field 3 follows the parenthesised command name, which may contain spaces
    fields = stat.rsplit(")", 1)[-1].split()
    return bool(fields) and fields[0] == "Z"


def _is_pid_running(pid: int) -> bool:
    """Check if a process with given PID is running."""
    try:
        os.kill(pid, 0)  # Signal 0 doesn't kill, just checks
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, but belongs to another user
        return True
    except (OSError, OverflowError):
        return False
    return not _is_zombie(pid)


def _wait_for_exit(pid: int, timeout: float) -> bool:
    """Poll until the process is gone. Returns False on timeout."""
    deadline = time.monotonic() + timeout
    while _is_pid_running(pid):
        if time.monotonic() >= deadline:
            return False
        time.sleep(LIVENESS_POLL_INTERVAL)
    return True


def terminate_process(
    pid: int,
    timeout: float = TERMINATE_TIMEOUT,
    kill_timeout: float = KILL_TIMEOUT,
) -> bool:
    """Ask a process to terminate and wait for it to exit.

    Sends SIGTERM, then SIGKILL if the process outlives ``timeout``. A
    process that exits before a signal reaches it counts as terminated.

    Args:
        pid: Process to terminate
        timeout: Seconds to wait after SIGTERM
        kill_timeout: Seconds to wait after SIGKILL

    Returns:
        True if the process is gone, False if it could not be stopped
    """
    try:
        os.kill(pid, signal.SIGTERM)
    except ProcessLookupError:
        return True
    except PermissionError:
        logger.warning("Not permitted to terminate PID %d, continuing anyway", pid)
        return False

    if _wait_for_exit(pid, timeout):
        return True

    logger.warning("PID %d did not exit after %.1fs, killing it", pid, timeout)
    try:
        os.kill(pid, signal.SIGKILL)
    except ProcessLookupError:
        return True
    except PermissionError:
        return False
    return _wait_for_exit(pid, kill_timeout)


def read_lock_record(lock_path: Path) -> LockRecord | None:
    """Read the lock record if it exists and is valid.

    A bare PID, as written by older shell wrappers, is accepted. Corrupted
    records are treated as no record.
    """
    try:
        content = lock_path.read_text().strip()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read lock file %s: %s", lock_path, e)
        return None

    try:
        if content.isascii() and content.isdigit():
            return LockRecord(pid=int(content))
        return LockRecord.model_validate_json(content)
    except (ValidationError, ValueError):
        logger.debug("Ignoring corrupt lock record in %s", lock_path)
        return None


def write_lock_record(lock_path: Path, record: LockRecord) -> None:
    """Atomically replace the lock record.

    Raises:
        RunGuardError: If the record cannot be written
    """
    tmp_path = lock_path.with_name(f".{lock_path.name}.{os.getpid()}.tmp")
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(record.model_dump_json())
        os.replace(tmp_path, lock_path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise RunGuardError(f"Could not write lock file {lock_path}: {e}") from e


def _exit_on_signal(signum: int, frame: FrameType | None) -> None:
    """Turn a termination signal into SystemExit so cleanup handlers run."""
    logger.debug("Received signal %d, exiting", signum)
    raise SystemExit(128 + signum)


class RunGuard:
    """Inter-process guard allowing one active lint run.

    Use as a context manager around a run::

        with RunGuard(lock_path, file=path):
            ...

    Entering cancels the previous run and records this process; leaving
    removes the record on every exit path, including SIGTERM and SIGHUP.
    """

    def __init__(
        self,
        lock_path: Path | None = None,
        file: Path | str | None = None,
        terminate_timeout: float = TERMINATE_TIMEOUT,
        handle_signals: bool = True,
    ) -> None:
        self.lock_path = lock_path or default_lock_path()
        self.file = file
        self.terminate_timeout = terminate_timeout
        self.handle_signals = handle_signals
        self.record: LockRecord | None = None
        self._previous_handlers: dict[int, Any] = {}

    def cancel_previous(self) -> int | None:
        """Terminate the run named in the lock record if it is still alive.

        Returns:
            PID of the cancelled run, or None if there was nothing to cancel
        """
        existing = read_lock_record(self.lock_path)
        if existing is None or existing.pid == os.getpid():
            return None

        if not _is_pid_running(existing.pid):
            logger.debug("Ignoring stale lock record for PID %d", existing.pid)
            return None

        logger.info("An existing instance (PID=%d) is running. Terminating it.", existing.pid)
        terminate_process(existing.pid, timeout=self.terminate_timeout)
        return existing.pid

    def acquire(self) -> LockRecord:
        """Cancel any previous run and record this process as the active one.

        Raises:
            RunGuardError: If the lock record cannot be written
        """
        self.cancel_previous()

        record = LockRecord(
            pid=os.getpid(),
            file=str(self.file) if self.file is not None else None,
        )
        write_lock_record(self.lock_path, record)
        self.record = record

        if self.handle_signals:
            self._install_signal_handlers()
        return record

    def release(self) -> None:
        """Remove the lock record if this process still owns it."""
        self._restore_signal_handlers()
        if self.record is None:
            return
        self.record = None

        # A newer run may already have taken the record over
        existing = read_lock_record(self.lock_path)
        if existing is not None and existing.pid == os.getpid():
            self.lock_path.unlink(missing_ok=True)

    def _install_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not in main thread, signal cleanup disabled")
            return
        for sig in _EXIT_SIGNALS:
            self._previous_handlers[sig] = signal.signal(sig, _exit_on_signal)

    def _restore_signal_handlers(self) -> None:
        for sig, handler in self._previous_handlers.items():
            # None means the handler was not installed from Python
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()

    def __enter__(self) -> "RunGuard":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
