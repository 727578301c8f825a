"""Shared helpers for the watchdog tests."""
from pathlib import Path

from qcwatchdog.local.config import MergedSettings


def make_config(root: Path) -> MergedSettings:
    """Builds settings whose every location lives under `root`."""
    config = MergedSettings(overrides_path=root / "overrides.json")
    config.PUBLISHER_NAME = "University of Washington"
    config.APP_NAME = "AutoQCStarter"
    config.LOG_FILE_NAME = "AutoQCStarter.log"
    config.BASE_DIR = root / "bin"
    config.LOG_DIR = root / "logs"
    config.LOCK_DIR = root / "locks"
    config.PROGRAMS_DIR = root / "Programs"
    config.STARTUP_DIR = root / "Startup"
    config.AUTOSTART_SHORTCUT_NAME = "AutoQCStarter.lnk"
    config.DEFAULT_CHANNEL = "release"
    # No waiting between ticks.
    config.MIN_POLL_INTERVAL_SECONDS = 0
    config.POLL_INTERVAL_SECONDS = 0
    config.NOTIFIER = "console"
    config.BASE_DIR.mkdir(parents=True, exist_ok=True)
    return config
