"""
Error taxonomy of the watchdog.

Every error here is terminal: it is caught at the supervisor's top-level
fault boundary, reported once to the operator and mapped to an exit code.
"""
from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    ALREADY_RUNNING = 2
    SETUP_FAILURE = 3
    RESOLUTION_FAILURE = 4
    TARGET_MISSING = 5
    UNHANDLED_FAULT = 6


class SupervisorError(Exception):
    """Base class for all terminal supervisor conditions."""
    exit_code = ExitCode.UNHANDLED_FAULT


class AlreadyRunningError(SupervisorError):
    """Another supervisor with the same identity holds the instance lock."""
    exit_code = ExitCode.ALREADY_RUNNING


class SetupError(SupervisorError):
    """The working directory or the log file could not be established."""
    exit_code = ExitCode.SETUP_FAILURE


class ResolutionError(SupervisorError):
    """No valid target could be found, or the given target argument is invalid."""
    exit_code = ExitCode.RESOLUTION_FAILURE


class TargetMissingError(SupervisorError):
    """The resolved target disappeared from disk while the monitor was running."""
    exit_code = ExitCode.TARGET_MISSING
