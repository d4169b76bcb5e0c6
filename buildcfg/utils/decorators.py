"""Reusable decorators."""

import functools
import inspect
import time
from typing import Callable

from buildcfg.utils.logging import get_logger

logger = get_logger(__name__)


def log_time(func: Callable) -> Callable:
    """
    Log execution time of a function or coroutine function.

    Usage:
        @log_time
        def load():
            ...

        @log_time
        async def call(hook):
            ...
    """

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter()
            result = await func(*args, **kwargs)
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__qualname__} completed in {elapsed:.3f}s")
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        logger.debug(f"{func.__qualname__} completed in {elapsed:.3f}s")
        return result

    return wrapper
