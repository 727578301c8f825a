"""Watchdog that keeps a single AutoQC instance running on this machine."""

__version__ = "1.0.0"
