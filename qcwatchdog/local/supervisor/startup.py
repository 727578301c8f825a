import os
import logging
from pathlib import Path
from typing import Any

from qcwatchdog.local.supervisor.errors import SetupError

log = logging.getLogger(__name__)


def ensure_log_file(config: Any) -> Path:
    """
    Makes sure the supervisor's log file can be created and appended to.

    :param config: The settings object.
    :return: The log file path.
    :raises SetupError: If the file cannot be opened for appending.
    """
    log_file = Path(config.log_file_path)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with log_file.open("a", encoding="utf-8"):
            pass
    except OSError as e:
        raise SetupError(f"Cannot create or write to log file: {log_file}.\nError was: {e}") from e
    return log_file


def set_working_directory(config: Any) -> None:
    """
    Switches the working directory to the supervisor's own directory.

    :param config: The settings object.
    :raises SetupError: If the directory cannot be entered.
    """
    base_dir = Path(config.BASE_DIR).resolve()
    current_wd = Path.cwd().resolve()

    log.info(f"Supervisor location: {base_dir}")
    log.info(f"Current working directory: {current_wd}")

    if os.path.normcase(str(base_dir)) == os.path.normcase(str(current_wd)):
        log.debug("Working directory is already the supervisor location.")
        return

    log.info(f"Setting working directory to {base_dir}")
    try:
        os.chdir(base_dir)
    except OSError as e:
        raise SetupError("Could not set working directory. Stopping.") from e


def delete_autostart_shortcut(config: Any) -> bool:
    """
    Removes this supervisor's login auto-start shortcut, if one exists,
    so it is not relaunched with the same bad argument on next login.

    :param config: The settings object.
    :return: True if a shortcut was deleted.
    """
    shortcut_path = Path(config.STARTUP_DIR) / config.AUTOSTART_SHORTCUT_NAME
    if not shortcut_path.exists():
        return False

    log.info(f"Deleting shortcut {shortcut_path}")
    try:
        shortcut_path.unlink()
    except OSError as e:
        log.error(f"Unable to delete {shortcut_path}: {e}")
        return False
    return True
