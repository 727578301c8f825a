"""
Logging module for the watchdog.
This module provides functionality to set up console and log file output.
"""

from .setup import setup_logging
from .handler import AppendFileHandler

__all__ = ["setup_logging", "AppendFileHandler"]
