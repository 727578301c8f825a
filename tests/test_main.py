import logging
import unittest
from unittest import mock

from qcwatchdog import main as entry
from qcwatchdog.local.supervisor import ExitCode


class TestMain(unittest.TestCase):
    def setUp(self) -> None:
        patches = {
            "supervisor_cls": mock.patch.object(entry, "Supervisor"),
            "setup_logging": mock.patch.object(entry, "setup_logging"),
            "setproctitle": mock.patch.object(entry, "setproctitle"),
            "signals": mock.patch.object(entry, "_install_signal_handlers"),
        }
        self.mocks = {}
        for key, patcher in patches.items():
            self.mocks[key] = patcher.start()
            self.addCleanup(patcher.stop)
        self.supervisor = self.mocks["supervisor_cls"].return_value
        self.supervisor.run.return_value = ExitCode.TARGET_MISSING

    def test_arguments_are_passed_to_the_supervisor(self) -> None:
        code = entry.main(["daily"])
        self.supervisor.run.assert_called_once_with(["daily"])
        self.mocks["setup_logging"].assert_called_once_with(logging.INFO)
        self.mocks["signals"].assert_called_once_with(self.supervisor)
        self.assertEqual(code, 5)
        self.assertIs(type(code), int)

    def test_verbose_flag_is_consumed(self) -> None:
        entry.main(["--verbose", "daily"])
        self.supervisor.run.assert_called_once_with(["daily"])
        self.mocks["setup_logging"].assert_called_once_with(logging.DEBUG)

    def test_process_title_is_the_supervisor_name(self) -> None:
        entry.main([])
        self.mocks["setproctitle"].setproctitle.assert_called_once_with(entry.config.APP_NAME)
        self.supervisor.run.assert_called_once_with([])

    def test_fault_before_the_run_is_reported_as_unhandled(self) -> None:
        self.mocks["supervisor_cls"].side_effect = ValueError("Unknown notifier 'popup'.")
        with mock.patch.object(entry, "ConsoleNotifier") as console:
            with self.assertLogs(entry.log, level="CRITICAL"):
                code = entry.main([])

        self.assertEqual(code, int(ExitCode.UNHANDLED_FAULT))
        self.assertIs(type(code), int)
        self.assertIn("popup", console.return_value.notify.call_args[0][0])
        self.mocks["signals"].assert_not_called()

    def test_logging_setup_failure_is_reported_as_unhandled(self) -> None:
        self.mocks["setup_logging"].side_effect = OSError("read-only file system")
        with mock.patch.object(entry, "ConsoleNotifier"):
            with self.assertLogs(entry.log, level="CRITICAL"):
                code = entry.main([])

        self.assertEqual(code, 6)
        self.mocks["supervisor_cls"].assert_not_called()


class TestSignalHandlers(unittest.TestCase):
    def test_signal_requests_shutdown(self) -> None:
        supervisor = mock.Mock()
        with mock.patch.object(entry.signal, "signal") as install:
            entry._install_signal_handlers(supervisor)

        handlers = {call.args[0]: call.args[1] for call in install.call_args_list}
        self.assertIn(entry.signal.SIGTERM, handlers)
        handlers[entry.signal.SIGTERM](entry.signal.SIGTERM, None)
        supervisor.request_shutdown.assert_called_once()


if __name__ == "__main__":
    unittest.main()
