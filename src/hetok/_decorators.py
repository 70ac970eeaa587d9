"""Reusable decorators for training and persistence utilities."""

import functools
import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(operation: str) -> Callable[[Callable], Callable]:
    """Log how long the wrapped callable took, labelled with ``operation``."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            # elapsed time is logged even when the call raises
            finally:
                elapsed = time.perf_counter() - start
                log.info(f"{operation} completed in {elapsed:.3f} s")

        return wrapper

    return decorator
