"""
This module contains the configuration settings for the QC Watchdog.
It defines the supervisor identity, the target application names, the
resolution locations and the monitor timing.
It is used throughout the application to ensure consistent settings and paths.
"""

import os
import sys
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(override=True)


def _get_env_int(key: str, default: int) -> int:
    """Get int from environment variable or use default."""
    val = os.getenv(key)
    try:
        return int(val) if val else default
    except ValueError:
        return default


#* --- Core Paths ---
# A frozen build keeps its log next to the executable, a source checkout next to the project root.
if getattr(sys, "frozen", False):
    BASE_DIR = pathlib.Path(sys.executable).resolve().parent
else:
    BASE_DIR = pathlib.Path(__file__).resolve().parent.parent
LOG_DIR = pathlib.Path(os.getenv("QCWATCHDOG_LOG_DIR", str(BASE_DIR)))
# Per-user, so two users on one machine each get their own watchdog.
LOCK_DIR = pathlib.Path(os.getenv("QCWATCHDOG_LOCK_DIR", str(pathlib.Path.home() / ".qcwatchdog" / "locks")))
OVERRIDES_JSON_PATH = BASE_DIR / "qcwatchdog.overrides.json"

#* --- Supervisor Identity ---
PUBLISHER_NAME = os.getenv("QCWATCHDOG_PUBLISHER", "University of Washington")
APP_NAME = os.getenv("QCWATCHDOG_APP_NAME", "AutoQCStarter")
LOG_FILE_NAME = f"{APP_NAME}.log"

#* --- Target Application ---
RELEASE_CHANNELS = {
    "release": "AutoQC",
    "daily": "AutoQC-daily",
}
DEFAULT_CHANNEL = "release"
EXECUTABLE_EXTENSION = ".exe"
APPREF_EXTENSION = ".appref-ms"
ACCEPTED_EXECUTABLE_NAMES = tuple(name + EXECUTABLE_EXTENSION for name in RELEASE_CHANNELS.values())

#* --- Shell Locations ---
if sys.platform == "win32":
    _START_MENU = pathlib.Path(os.getenv("APPDATA", str(pathlib.Path.home()))) / "Microsoft" / "Windows" / "Start Menu"
    _DEFAULT_PROGRAMS_DIR = _START_MENU / "Programs"
    _DEFAULT_STARTUP_DIR = _DEFAULT_PROGRAMS_DIR / "Startup"
    AUTOSTART_SHORTCUT_NAME = f"{APP_NAME}.lnk"
else:
    _DEFAULT_PROGRAMS_DIR = pathlib.Path.home() / ".local" / "share" / "applications"
    _DEFAULT_STARTUP_DIR = pathlib.Path.home() / ".config" / "autostart"
    AUTOSTART_SHORTCUT_NAME = f"{APP_NAME}.desktop"
PROGRAMS_DIR = pathlib.Path(os.getenv("QCWATCHDOG_PROGRAMS_DIR", str(_DEFAULT_PROGRAMS_DIR)))
STARTUP_DIR = pathlib.Path(os.getenv("QCWATCHDOG_STARTUP_DIR", str(_DEFAULT_STARTUP_DIR)))

#* --- Monitor Settings ---
DEFAULT_POLL_INTERVAL_SECONDS = 60
MIN_POLL_INTERVAL_SECONDS = 1
POLL_INTERVAL_SECONDS = _get_env_int("QCWATCHDOG_POLL_INTERVAL", DEFAULT_POLL_INTERVAL_SECONDS)

#* --- Operator Notification ---
# 'dialog' shows a blocking message box, 'console' writes to stderr, 'auto' picks one.
NOTIFIER_KINDS = ("auto", "dialog", "console")
NOTIFIER = os.getenv("QCWATCHDOG_NOTIFIER", "auto").lower()

#* --- MODIFIABLE SETTINGS (Changeable through the overrides file) ---
MODIFIABLE_SETTINGS = {
    "POLL_INTERVAL_SECONDS",
    "NOTIFIER",
    "DEFAULT_CHANNEL",
}
