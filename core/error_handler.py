"""Decorators that log failures and timings through loguru."""
from __future__ import annotations

import functools
import time
from typing import Callable, Optional

from loguru import logger


def handle_exceptions(logger_instance=logger, message: Optional[str] = None):
    """Log any exception raised by the wrapped call, with traceback, and return None.

    Used where one failing callback must not stop its siblings: speech
    observers and cleanup handlers.

    Args:
        logger_instance: Logger to use for error logging
        message: Prefix for the logged error; defaults to the function name
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                prefix = message or f"Error in {func.__name__}"
                logger_instance.opt(exception=e).error(f"{prefix}: {e}")
                return None
        return wrapper
    return decorator


def log_execution_time(logger_instance=logger, level: str = "DEBUG"):
    """Log how long the wrapped call took, at ``level``."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - started
                log = getattr(logger_instance, level.lower(), logger_instance.debug)
                log(f"{func.__name__} executed in {elapsed:.3f}s")
        return wrapper
    return decorator
