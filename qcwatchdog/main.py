import sys
import signal
import logging
from typing import List, Optional

import setproctitle

from qcwatchdog.local.config import effective_settings as config
from qcwatchdog.local.notify import ConsoleNotifier, ErrorReporter
from qcwatchdog.local.supervisor import ExitCode, Supervisor
from qcwatchdog.log.setup import setup_logging

log = logging.getLogger(__name__)


def _install_signal_handlers(supervisor: Supervisor) -> None:
    """Routes termination signals into an orderly supervisor shutdown."""
    def _handler(signum, frame):
        log.info(f"Received signal {signal.Signals(signum).name}. Shutting down.")
        supervisor.request_shutdown()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)


def main(argv: Optional[List[str]] = None) -> int:
    """
    The main entry point for the watchdog.

    Accepts zero or one positional argument: nothing for the default release
    channel, a channel keyword such as 'daily', or a path to the target
    executable. '--verbose' shows debug output on the console.

    :param argv: Command-line arguments without the program name.
    :return: The process exit code.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    console_level = logging.INFO
    if "--verbose" in args:
        console_level = logging.DEBUG
        args.remove("--verbose")

    try:
        setproctitle.setproctitle(config.APP_NAME)
        setup_logging(console_level)

        supervisor = Supervisor(config)
        _install_signal_handlers(supervisor)
    except Exception as e:
        log.critical(f"{config.APP_NAME} could not start: {e}", exc_info=True)
        ErrorReporter(ConsoleNotifier(f"{config.APP_NAME} Error")).report(
            f"{config.APP_NAME} could not start.\nError was: {e}"
        )
        return int(ExitCode.UNHANDLED_FAULT)

    return int(supervisor.run(args))


if __name__ == "__main__":
    sys.exit(main())
