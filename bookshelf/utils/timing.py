"""Lightweight timing helpers for query debugging."""
import time
from contextlib import contextmanager
from typing import Optional, Callable
import logging

logger = logging.getLogger(__name__)


def now_ms() -> float:
    """Return current time in milliseconds using high-resolution timer."""
    return time.perf_counter() * 1000


@contextmanager
def time_operation(label: str, log_fn: Optional[Callable[[str], None]] = None, min_ms: float = 0.0):
    """
    Time the enclosed block and log '<label>: <elapsed>ms'.

    Args:
        label: Description of the operation being timed
        log_fn: Logging function (defaults to this module's logger.debug)
        min_ms: Only log if elapsed time >= min_ms

    Example:
        with time_operation(f"unfavorited_books user={user_id}"):
            books = query.all()
    """
    start = now_ms()
    try:
        yield
    finally:
        elapsed = now_ms() - start
        if elapsed >= min_ms:
            (log_fn or logger.debug)(f"{label}: {elapsed:.2f}ms")
