"""
Operator notification for terminal supervisor conditions.

A notifier has a single `notify(message)` operation. The dialog notifier
blocks on a modal message box; the console notifier suits headless hosts.
"""
import os
import sys
import logging
from typing import Any

log = logging.getLogger(__name__)


class Notifier:
    """Interface for anything that can bring a message to an operator."""

    def notify(self, message: str) -> None:
        raise NotImplementedError


class ConsoleNotifier(Notifier):
    """Writes the message to stderr and returns immediately."""

    def __init__(self, title: str):
        self.title = title

    def notify(self, message: str) -> None:
        print(f"{self.title}: {message}", file=sys.stderr)


class DialogNotifier(Notifier):
    """Shows the message in a blocking error box until the operator dismisses it."""

    def __init__(self, title: str):
        self.title = title

    def notify(self, message: str) -> None:
        import tkinter as tk
        from tkinter import messagebox

        try:
            root = tk.Tk()
        except tk.TclError as e:
            log.error(f"Could not open a message box ({e}). Message was: {message}")
            print(f"{self.title}: {message}", file=sys.stderr)
            return

        root.withdraw()
        try:
            messagebox.showerror(self.title, message, parent=root)
        finally:
            root.destroy()


def get_notifier(kind: str, app_name: str) -> Notifier:
    """
    Builds the notifier selected by the NOTIFIER setting.

    :param kind: 'dialog', 'console' or 'auto'. 'auto' uses a dialog on Windows and
                 wherever a display is available, the console otherwise.
    :param app_name: Used in the notification title.
    """
    title = f"{app_name} Error"
    kind = (kind or "auto").lower()
    if kind == "auto":
        has_display = sys.platform in ("win32", "darwin") or bool(os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY"))
        kind = "dialog" if has_display else "console"

    if kind == "dialog":
        return DialogNotifier(title)
    if kind == "console":
        return ConsoleNotifier(title)
    raise ValueError(f"Unknown notifier '{kind}'. Expected 'auto', 'dialog' or 'console'.")


class ErrorReporter:
    """Records a terminal condition in the log and brings it to the operator."""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier

    def report(self, message: str) -> None:
        log.error(message)
        try:
            self.notifier.notify(message)
        except Exception as e:
            log.error(f"Could not notify the operator: {e}", exc_info=True)


def build_reporter(config: Any) -> ErrorReporter:
    """Creates the reporter for the configured notifier."""
    return ErrorReporter(get_notifier(config.NOTIFIER, config.APP_NAME))
