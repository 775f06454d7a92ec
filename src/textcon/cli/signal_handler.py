"""Signal handling utilities for the textcon CLI.

SIGINT and, where the platform has it, SIGPIPE are recorded instead of raising,
so that output is stopped at the next write and the process exits with the
conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

HAS_SIGPIPE = hasattr(signal, "SIGPIPE")


class SignalHandler:
    """Records SIGINT and SIGPIPE so that the CLI can stop writing and exit cleanly.

    Each handler restores the original disposition after the first signal, so a
    second Ctrl+C interrupts immediately.

    Attributes:
        sigpipe_received: Event that is set when a SIGPIPE signal is received.
        sigint_received: Event that is set when a SIGINT signal is received.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self._original_sigint: Any = signal.getsignal(signal.SIGINT)
        self._original_sigpipe: Any = signal.getsignal(signal.SIGPIPE) if HAS_SIGPIPE else None

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signal.SIGPIPE, self._original_sigpipe)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self._original_sigint)

    def exit_code(self) -> Optional[int]:
        """Return the exit status for the signal received, or None if there was none."""
        if self.sigpipe_received.is_set():
            return 141
        if self.sigint_received.is_set():
            return 130
        return None


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Configure signal handlers for SIGINT and, where available, SIGPIPE."""
    if HAS_SIGPIPE:
        signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Redirect stdout to the null device after an interruption.

    This keeps the interpreter from reporting a broken pipe while flushing
    stdout at shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
