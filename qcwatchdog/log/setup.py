import logging
import sys
from pathlib import Path
from typing import Optional

from qcwatchdog.local.config import effective_settings as config
from qcwatchdog.log.handler import AppendFileHandler


def setup_logging(console_level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """
    Configures the root logger for the watchdog.
    This sets up handlers for the console and the supervisor's log file,
    clearing any previously configured handlers to prevent duplication.

    :param console_level: The logging level for the console output (e.g., logging.INFO).
    :param log_file: The log file to append to, defaults to the configured one.
    """
    root_logger = logging.getLogger()
    # Set root level to lowest to capture all messages for handler filtering
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers to prevent re-adding them on re-runs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s')
    )
    root_logger.addHandler(console_handler)

    # --- Log File Handler (debug chatter stays on the console) ---
    file_handler = AppendFileHandler(log_file or config.log_file_path)
    file_handler.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)
