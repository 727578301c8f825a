import logging
from enum import Enum
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Optional

from qcwatchdog.local.supervisor.errors import ResolutionError

log = logging.getLogger(__name__)


class TargetKind(Enum):
    APPLICATION_REFERENCE = "application reference"
    EXECUTABLE = "executable"


@dataclass(frozen=True)
class TargetReference:
    """
    The launchable target found at startup.

    :param path: Location of the application reference or executable.
    :param kind: What sort of file `path` is.
    :param process_name: Logical process name used to check whether the target runs.
    """
    path: Path
    kind: TargetKind
    process_name: str

    def exists(self) -> bool:
        return self.path.is_file()


class PathResolver:
    """
    Locates the target application through an ordered fallback chain:
    an explicit path argument, then an application reference in the
    shell's programs folder, then an executable next to the supervisor.
    """

    def __init__(self, config: Any):
        self.config = config

    def resolve(self, argument: Optional[str] = None) -> TargetReference:
        """
        Resolves the target from the single optional command-line argument.

        :param argument: None, a release channel keyword, or a path to the target executable.
        :return: The resolved target.
        :raises ResolutionError: If the argument is invalid or no target is found.
        """
        if argument is None:
            channel = self.config.DEFAULT_CHANNEL
        else:
            argument = argument.strip()
            channel = argument.lower()
            if channel not in self.config.RELEASE_CHANNELS:
                # Anything but a channel keyword is taken as a path to the executable.
                return self.resolve_explicit_path(argument)

        try:
            product_name = self.config.RELEASE_CHANNELS[channel]
        except KeyError:
            raise ResolutionError(f"Unknown release channel '{channel}'.")

        target = self.find_app_reference(product_name) or self.find_colocated_executable(product_name)
        if target is None:
            appref_name = product_name + self.config.APPREF_EXTENSION
            exe_name = product_name + self.config.EXECUTABLE_EXTENSION
            raise ResolutionError(f"Cannot find path to {appref_name} or {exe_name}. Stopping.")

        log.info(f"Resolved {target.kind.value} for {product_name}: {target.path}")
        return target

    def resolve_explicit_path(self, argument: str) -> TargetReference:
        """
        Validates an explicitly given target executable path. No other strategy is tried.

        :param argument: The path as given on the command line.
        :raises ResolutionError: If the path does not exist or names an unexpected file.
        """
        path = Path(argument)
        accepted = " or ".join(self.config.ACCEPTED_EXECUTABLE_NAMES)
        if not path.is_file():
            raise ResolutionError(f"Given path to the target executable does not exist: {path}")
        if path.name not in self.config.ACCEPTED_EXECUTABLE_NAMES:
            raise ResolutionError(f"Given path is not to a {accepted}: {path}")

        log.info(f"Using target executable given on the command line: {path}")
        return TargetReference(path=path, kind=TargetKind.EXECUTABLE, process_name=path.stem)

    def find_app_reference(self, product_name: str) -> Optional[TargetReference]:
        """
        Looks for `<product><APPREF_EXTENSION>` under the publisher's programs folder,
        or under a folder named after the product when the publisher's is missing.
        """
        appref_name = product_name + self.config.APPREF_EXTENSION
        programs_dir = Path(self.config.PROGRAMS_DIR)
        appref_dir = programs_dir / self.config.PUBLISHER_NAME

        log.info(f"Looking for application reference {appref_name} in {appref_dir}.")
        if not appref_dir.is_dir():
            appref_dir = programs_dir / product_name
            log.info(f"Looking for application reference {appref_name} in {appref_dir}.")

        if not appref_dir.is_dir():
            log.info(f"Could not find location of application reference {appref_name}.")
            return None

        appref_path = appref_dir / appref_name
        if appref_path.is_file():
            return TargetReference(path=appref_path, kind=TargetKind.APPLICATION_REFERENCE, process_name=product_name)

        log.info(f"Application reference {appref_name} does not exist in {appref_dir}.")
        return None

    def find_colocated_executable(self, product_name: str) -> Optional[TargetReference]:
        """Looks for the product's executable in the supervisor's own directory."""
        exe_name = product_name + self.config.EXECUTABLE_EXTENSION
        base_dir = Path(self.config.BASE_DIR)

        log.info(f"Looking for {exe_name} in {base_dir}.")
        exe_path = base_dir / exe_name
        if exe_path.is_file():
            return TargetReference(path=exe_path, kind=TargetKind.EXECUTABLE, process_name=product_name)
        return None
