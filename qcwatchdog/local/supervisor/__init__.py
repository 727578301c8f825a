"""
The Supervisor package.
Keeps the target application running on this machine.

This package contains the central Supervisor class and its helper modules,
which together handle the instance lock, target resolution, startup
environment and process launching.
"""
from .supervisor import RunState, Supervisor
from .errors import ExitCode

__all__ = ['Supervisor', 'RunState', 'ExitCode']
