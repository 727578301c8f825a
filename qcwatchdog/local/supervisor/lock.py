"""
Single-instance guard for the supervisor.

The lock is an OS-level exclusive lock on a file named after the supervisor
identity. It is released by the kernel if the process dies, so a crashed
supervisor never blocks the next one.
"""
import os
import sys
import logging
from pathlib import Path
from typing import IO, Optional

from qcwatchdog.local.supervisor.errors import AlreadyRunningError, SetupError

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl

log = logging.getLogger(__name__)


def lock_name_for(publisher_name: str, app_name: str) -> str:
    """Returns the systemwide lock name for a supervisor identity."""
    return f"{publisher_name} {app_name}"


class InstanceLock:
    """
    A non-blocking, process-wide named lock.

    Use it as a context manager; entering raises `AlreadyRunningError`
    immediately when another process holds the same name, and leaving
    always releases it.
    """

    def __init__(self, publisher_name: str, app_name: str, lock_dir: Path):
        """
        :param publisher_name: Publisher half of the supervisor identity.
        :param app_name: Application half of the supervisor identity.
        :param lock_dir: Directory holding the lock file.
        """
        self.app_name = app_name
        self.name = lock_name_for(publisher_name, app_name)
        safe_name = "".join(c if c.isalnum() or c in " -_." else "_" for c in self.name)
        self.lock_path = Path(lock_dir) / f"{safe_name}.lock"
        self._file_handle: Optional[IO[str]] = None

    @property
    def is_acquired(self) -> bool:
        return self._file_handle is not None

    def acquire(self) -> None:
        """
        Attempts to take the lock without waiting.

        :raises AlreadyRunningError: If the lock is held elsewhere.
        :raises SetupError: If the lock file cannot be created or opened.
        """
        if self.is_acquired:
            return

        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            # "a+" never truncates a file another process may have locked
            fh = open(self.lock_path, "a+")
        except OSError as e:
            raise SetupError(f"Cannot open lock file {self.lock_path}: {e}") from e

        try:
            fh.seek(0)
            if sys.platform == "win32":
                msvcrt.locking(fh.fileno(), msvcrt.LK_NBLCK, 1)
            else:
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            fh.close()
            log.debug(f"Lock '{self.name}' is held by another process.")
            raise AlreadyRunningError(f"{self.app_name} is already running.")

        self._file_handle = fh
        self._write_lock_info()
        log.debug(f"Acquired lock '{self.name}' at {self.lock_path}")

    def _write_lock_info(self) -> None:
        """Records the owning PID in the lock file, for operators only."""
        try:
            self._file_handle.seek(0)
            self._file_handle.truncate()
            self._file_handle.write(str(os.getpid()))
            self._file_handle.flush()
        except OSError as e:
            log.debug(f"Could not record owner in lock file: {e}")

    def release(self) -> None:
        """Releases the lock. Calling it on an unacquired lock does nothing."""
        if self._file_handle is None:
            return

        fh, self._file_handle = self._file_handle, None
        try:
            if sys.platform == "win32":
                fh.seek(0)
                msvcrt.locking(fh.fileno(), msvcrt.LK_UNLCK, 1)
            else:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            log.warning(f"Error releasing lock '{self.name}': {e}")
        finally:
            fh.close()
        log.debug(f"Released lock '{self.name}'")

    def __enter__(self) -> "InstanceLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()
