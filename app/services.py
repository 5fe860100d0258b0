"""Services for application infrastructure management.

Keeps infrastructure concerns (uncaught exceptions, termination signals,
ordered shutdown) out of the application logic.
"""
from __future__ import annotations

import atexit
import signal
import sys
import traceback
from typing import Callable, List, Optional, Tuple

from loguru import logger

from core.error_handler import handle_exceptions


class ExceptionHandlerService:
    """Routes uncaught exceptions through loguru before the default hook runs."""

    def __init__(self):
        self._original_excepthook = sys.excepthook

    def install(self) -> None:
        def excepthook(exc_type, exc_value, exc_traceback):
            try:
                tb = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
                logger.error("Uncaught exception:\n{}", tb)
            finally:
                self._original_excepthook(exc_type, exc_value, exc_traceback)

        sys.excepthook = excepthook

    def uninstall(self) -> None:
        sys.excepthook = self._original_excepthook


class SignalHandlerService:
    """Runs cleanup and quits the event loop on SIGINT/SIGTERM.

    Args:
        cleanup_callback: Function to call for cleanup
        quit_callback: Function to call to leave the event loop (e.g. QCoreApplication.quit)
    """

    def __init__(self, cleanup_callback: Optional[Callable[[], None]] = None,
                 quit_callback: Optional[Callable[[], None]] = None):
        self.cleanup_callback = cleanup_callback
        self.quit_callback = quit_callback

    def install(self) -> None:
        def _handle(signum, frame):
            logger.info(f"Received signal {signum}, shutting down")
            try:
                if self.cleanup_callback:
                    self.cleanup_callback()
            finally:
                if self.quit_callback:
                    self.quit_callback()

        for sig_name in ("SIGINT", "SIGTERM"):
            sig = getattr(signal, sig_name, None)
            if sig is not None:
                signal.signal(sig, _handle)


class CleanupService:
    """Ordered, run-once registry of shutdown handlers."""

    def __init__(self):
        self._cleanup_handlers: List[Tuple[Callable[[], None], str]] = []
        self._cleaned_up = False

    def register(self, handler: Callable[[], None], name: str = "") -> None:
        """Register a cleanup handler.

        Args:
            handler: Function to call during cleanup
            name: Optional name for the handler (for logging)
        """
        self._cleanup_handlers.append((handler, name))

    @property
    def cleaned_up(self) -> bool:
        return self._cleaned_up

    @handle_exceptions(message="Cleanup failed")
    def cleanup(self) -> None:
        """Execute all registered cleanup handlers in registration order.

        A failing handler is logged and does not stop the following ones.
        Calling cleanup more than once has no additional effect.
        """
        if self._cleaned_up:
            return

        self._cleaned_up = True
        logger.debug("Starting cleanup...")

        for handler, name in self._cleanup_handlers:
            try:
                logger.debug(f"Cleaning up: {name or handler.__name__}")
                handler()
            except Exception as e:
                logger.warning(f"Cleanup handler {name} failed: {e}")

        logger.debug("Cleanup completed")

    def install_atexit(self) -> None:
        atexit.register(self.cleanup)
