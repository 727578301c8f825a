import os
import sys
import psutil
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List

from qcwatchdog.local.supervisor.resolver import TargetKind, TargetReference

log = logging.getLogger(__name__)


#* --- Process Status ---
def _logical_name(process_name: str) -> str:
    """Strips an executable extension so 'AutoQC.exe' and 'AutoQC' compare equal."""
    stem, ext = os.path.splitext(process_name)
    return (stem if ext.lower() == ".exe" else process_name).lower()

def find_processes_by_name(process_name: str) -> List[psutil.Process]:
    """
    Returns all running processes whose name matches the logical process name.
    Matching is by name only; copies started from different paths are all returned.
    """
    wanted = _logical_name(process_name)
    matches = []
    for proc in psutil.process_iter(["name"]):
        try:
            name = proc.info["name"]
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if name and _logical_name(name) == wanted:
            matches.append(proc)
    return matches

def is_process_running(process_name: str) -> bool:
    """A wrapper over the process table query for easy testing/mocking."""
    return bool(find_processes_by_name(process_name))


#* --- Process Creation ---
def _get_popen_creation_flags() -> Dict[str, Any]:
    """Returns platform-specific creation flags for subprocess.Popen."""
    if sys.platform == "win32":
        return {"creationflags": subprocess.DETACHED_PROCESS | subprocess.CREATE_NO_WINDOW}
    return {"start_new_session": True}

def _get_open_command(path: Path) -> List[str]:
    """Returns the desktop 'open' command for a non-Windows platform."""
    opener = "open" if sys.platform == "darwin" else "xdg-open"
    return [opener, str(path)]

def launch_target(target: TargetReference) -> None:
    """
    Starts the target through the platform's open/execute mechanism and returns
    immediately. The new process is never waited on or tracked.

    :param target: The resolved target.
    :raises OSError: If the operating system refuses to start it.
    """
    if target.kind is TargetKind.APPLICATION_REFERENCE:
        if sys.platform == "win32":
            # Shell execution resolves .appref-ms files to the installed application.
            # No show_cmd: it would also apply to the application's main window.
            os.startfile(str(target.path))
            return
        args = _get_open_command(target.path)
    else:
        # CREATE_NO_WINDOW keeps a console from appearing on Windows.
        args = [str(target.path)]

    subprocess.Popen(
        args,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        cwd=str(target.path.parent),
        **_get_popen_creation_flags()
    )
