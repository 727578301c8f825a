import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from qcwatchdog.local.config import effective_settings
from qcwatchdog.local.notify import ErrorReporter, build_reporter
from qcwatchdog.local.supervisor import process_utils, startup
from qcwatchdog.local.supervisor.errors import (
    ExitCode, ResolutionError, SupervisorError, TargetMissingError
)
from qcwatchdog.local.supervisor.lock import InstanceLock
from qcwatchdog.local.supervisor.resolver import PathResolver, TargetReference

log = logging.getLogger(__name__)


@dataclass
class RunState:
    """Monitor state, owned and mutated by the supervision loop only."""
    running: bool = False
    # Set once "is running" has been logged for the current running interval.
    last_announced: bool = False


class Supervisor:
    """
    Keeps a single target application running.

    `run` is the only public entry point. It takes the instance lock,
    resolves the target and monitors it until a terminal condition occurs,
    then releases the lock, reports the condition and returns an exit code.
    """

    def __init__(
        self,
        config: Any = None,
        reporter: Optional[ErrorReporter] = None,
        resolver: Optional[PathResolver] = None,
    ) -> None:
        self.config = config if config is not None else effective_settings
        self.reporter = reporter if reporter is not None else build_reporter(self.config)
        self.resolver = resolver if resolver is not None else PathResolver(self.config)

        self.target: Optional[TargetReference] = None
        self.run_state = RunState()
        self.shutdown_signal_received = threading.Event()

    def request_shutdown(self) -> None:
        """Asks the supervision loop to stop at its next wake-up. Safe to call from a signal handler."""
        self.shutdown_signal_received.set()

    def run(self, args: Sequence[str] = ()) -> ExitCode:
        """
        Runs the supervisor inside a single fault boundary.

        :param args: Positional command-line arguments, at most one.
        :return: The exit code for the terminal condition that ended the run.
        """
        app_name = self.config.APP_NAME
        try:
            with InstanceLock(self.config.PUBLISHER_NAME, app_name, self.config.LOCK_DIR):
                log.info(f"Starting {app_name}...")
                self._run_locked(list(args))
        except ResolutionError as e:
            self.reporter.report(str(e))
            # Only a bad argument means the auto-start entry itself is broken.
            if args:
                startup.delete_autostart_shortcut(self.config)
            return e.exit_code
        except SupervisorError as e:
            self.reporter.report(str(e))
            return e.exit_code
        except Exception as e:
            log.critical(f"{app_name} encountered an unexpected error: {e}", exc_info=True)
            self.reporter.report(
                f"{app_name} encountered an unexpected error. "
                f"Error details may be found in the {self.config.LOG_FILE_NAME} file "
                f"in this directory: {self.config.LOG_DIR}\nError was: {e}"
            )
            return ExitCode.UNHANDLED_FAULT

        log.info(f"{app_name} stopped.")
        return ExitCode.OK

    def _run_locked(self, args: List[str]) -> None:
        """Everything that happens while the instance lock is held."""
        startup.ensure_log_file(self.config)
        startup.set_working_directory(self.config)

        if len(args) > 1:
            channels = ", ".join(f'"{c}"' for c in self.config.RELEASE_CHANNELS)
            executables = " or ".join(self.config.ACCEPTED_EXECUTABLE_NAMES)
            raise ResolutionError(
                f"Too many arguments given. Expected at most one of {channels} or a path to {executables}."
            )

        self.target = self.resolver.resolve(args[0] if args else None)
        self.supervision_loop()

    def supervision_loop(self) -> None:
        """
        Checks the target every POLL_INTERVAL_SECONDS until shutdown is requested.

        :raises TargetMissingError: When the resolved target vanishes from disk.
        """
        interval = max(self.config.POLL_INTERVAL_SECONDS, self.config.MIN_POLL_INTERVAL_SECONDS)
        log.info(f"Monitoring {self.target.process_name} every {interval} seconds.")
        self.run_state = RunState()

        try:
            while not self.shutdown_signal_received.is_set():
                self.tick()
                if self.shutdown_signal_received.wait(interval):
                    break
        except KeyboardInterrupt:
            log.info("Supervisor loop interrupted by user.")
            return
        log.info("Shutdown requested. Leaving supervisor loop.")

    def tick(self) -> bool:
        """
        Runs a single check-and-launch cycle.

        A launch is not verified; a target that fails to come up is
        simply launched again on the next tick.

        :return: True if the target was launched during this tick.
        :raises TargetMissingError: If the target path no longer exists.
        """
        target = self.target
        if not target.exists():
            raise TargetMissingError(f"{target.path} no longer exists. Stopping.")

        self.run_state.running = process_utils.is_process_running(target.process_name)
        if not self.run_state.running:
            log.info(f"Starting {target.process_name}.")
            try:
                process_utils.launch_target(target)
            except OSError as e:
                log.error(f"Launching {target.path} failed: {e}")
            self.run_state.last_announced = False
            return True

        if not self.run_state.last_announced:
            log.info(f"{target.process_name} is running.")
            self.run_state.last_announced = True
        return False
