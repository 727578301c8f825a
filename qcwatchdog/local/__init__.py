"""
Local package for the QC Watchdog.

This package provides the effective configuration through the
effective_settings object, plus operator notification and the supervisor.
"""

from .config import effective_settings

__all__ = ["effective_settings"]
