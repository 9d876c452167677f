"""
Shutdown signal and stop triggers.

The ShutdownSignal is the single cancellation primitive of a periodic run.
Stop triggers (a line on stdin, SIGINT, SIGTERM) set it; the periodic
scheduler polls it between rounds and while sleeping. The flag is backed by a
threading.Event because the stdin trigger fires from a background thread.
"""

import asyncio
import logging
import signal
import sys
import threading
from typing import Optional, TextIO

# Module logger
logger = logging.getLogger(__name__)


class ShutdownSignal:
    """A thread-safe flag that can be set once and is never reset."""

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()
        self._lock: threading.Lock = threading.Lock()

    def set(self, reason: str = "stop requested") -> bool:
        """
        Sets the flag.

        Setting an already-set flag has no effect.

        Args:
            reason: Logged when the flag is set for the first time.

        Returns:
            bool: True if this call set the flag, False if it was already set.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
        logger.info(f"Shutdown signal set: {reason}.")
        return True

    def is_set(self) -> bool:
        return self._event.is_set()


def start_stdin_watcher(shutdown: ShutdownSignal, stream: Optional[TextIO] = None) -> threading.Thread:
    """
    Sets the shutdown signal when a line is read from stdin.

    End of input sets the signal as well. The watcher runs in a daemon thread
    so a pending read never keeps the process alive.

    Args:
        shutdown: The signal to set.
        stream: The stream to read from. Defaults to sys.stdin.

    Returns:
        threading.Thread: The started watcher thread.
    """
    source: TextIO = stream if stream is not None else sys.stdin

    def _watch() -> None:
        try:
            source.readline()
        except (OSError, ValueError) as e:
            logger.warning(f"Stdin watcher stopped reading: {e}")
        shutdown.set("input received")

    thread = threading.Thread(target=_watch, name="stdin-watcher", daemon=True)
    thread.start()
    return thread


def install_signal_handlers(
    shutdown: ShutdownSignal, loop: Optional[asyncio.AbstractEventLoop] = None
) -> None:
    """
    Makes SIGINT and SIGTERM set the shutdown signal.

    Event loops without signal handler support (e.g. on Windows) are skipped.

    Args:
        shutdown: The signal to set.
        loop: The loop to install the handlers on. Defaults to the running loop.
    """
    target_loop = loop or asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            target_loop.add_signal_handler(sig, shutdown.set, f"received {sig.name}")
        except (NotImplementedError, RuntimeError):
            logger.debug(f"Signal handlers are not supported here; {sig.name} not installed.")
