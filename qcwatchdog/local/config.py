import json
import logging
from pathlib import Path
from typing import Any, Optional

import qcwatchdog.settings as default_settings

log = logging.getLogger(__name__)


class MergedSettings:
    """
    A singleton class that merges default settings with JSON/env overrides.

    This class provides a unified, attribute-based access point for all
    watchdog configuration. It follows a clear precedence:
    1. Base values from `settings.py`.
    2. Overrides from `.env` file (handled by `python-dotenv` in settings.py).
    3. Overrides from the overrides JSON file for settings in `MODIFIABLE_SETTINGS`.
    """

    def __init__(self, overrides_path: Optional[Path] = None) -> None:
        """
        Initializes the settings object by loading defaults and overrides.

        :param overrides_path: Alternative overrides file, defaults to the one named in settings.py.
        """
        self._load_defaults()
        self._check_defaults()
        if overrides_path is not None:
            self.OVERRIDES_JSON_PATH = Path(overrides_path)
        self._load_overrides()

    def _load_defaults(self) -> None:
        """Loads all uppercase attributes from the settings.py module as defaults."""
        for key in dir(default_settings):
            if key.isupper():
                setattr(self, key, getattr(default_settings, key))

    def _validation_error(self, key: str, value: Any) -> Optional[str]:
        """Returns why `value` is unusable for `key`, or None when it is fine."""
        if key == "POLL_INTERVAL_SECONDS" and value < self.MIN_POLL_INTERVAL_SECONDS:
            return f"must be at least {self.MIN_POLL_INTERVAL_SECONDS} second(s)"
        if key == "NOTIFIER" and value not in self.NOTIFIER_KINDS:
            return f"must be one of {', '.join(self.NOTIFIER_KINDS)}"
        return None

    def _check_defaults(self) -> None:
        """Replaces unusable values that came in through the environment."""
        fallbacks = {
            "POLL_INTERVAL_SECONDS": self.DEFAULT_POLL_INTERVAL_SECONDS,
            "NOTIFIER": "auto",
        }
        for key, fallback in fallbacks.items():
            value = getattr(self, key)
            problem = self._validation_error(key, value)
            if problem:
                log.error(f"Invalid value '{value}' for setting '{key}': {problem}. Using '{fallback}'.")
                setattr(self, key, fallback)

    def _load_overrides(self) -> None:
        """
        Loads and applies settings from the overrides JSON file.

        Only keys explicitly listed in `MODIFIABLE_SETTINGS` are applied,
        and each value is coerced to the type of its default.
        """
        if not self.OVERRIDES_JSON_PATH.exists():
            return

        try:
            with self.OVERRIDES_JSON_PATH.open('r') as f:
                overrides = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.error(f"Failed to load or parse overrides file '{self.OVERRIDES_JSON_PATH}': {e}")
            return

        if not isinstance(overrides, dict):
            log.error(f"Overrides file '{self.OVERRIDES_JSON_PATH}' does not contain a JSON object. Ignoring.")
            return

        log.info(f"Loading configuration overrides from {self.OVERRIDES_JSON_PATH}")
        for key, value in overrides.items():
            if not hasattr(self, key):
                log.warning(f"Override setting '{key}' not found in default settings. Ignoring.")
                continue
            if key not in self.MODIFIABLE_SETTINGS:
                log.warning(f"Attempted to override non-modifiable setting '{key}'. Ignoring.")
                continue

            original_value = getattr(self, key)
            try:
                if isinstance(original_value, Path):
                    new_value = Path(value)
                elif isinstance(original_value, bool):
                    new_value = str(value).lower() in ('true', '1', 't', 'yes', 'y')
                elif original_value is not None:
                    new_value = type(original_value)(value)
                else:
                    new_value = value
            except (ValueError, TypeError) as e:
                log.error(f"Could not convert value '{value}' for key '{key}'. Error: {e}")
                continue

            if key == "NOTIFIER":
                new_value = new_value.lower()
            problem = self._validation_error(key, new_value)
            if problem:
                log.error(f"Rejected override '{value}' for key '{key}': {problem}. Keeping '{original_value}'.")
                continue

            setattr(self, key, new_value)
            log.debug(f"Overridden setting: {key} = {new_value}")

    def get(self, item: str, default: Any = None) -> Any:
        """Provides dictionary-like access to settings with a default value."""
        return getattr(self, item, default)

    @property
    def log_file_path(self) -> Path:
        """The full path of the supervisor's own log file."""
        return Path(self.LOG_DIR) / self.LOG_FILE_NAME


# Create a singleton instance to be imported by other modules
effective_settings = MergedSettings()
