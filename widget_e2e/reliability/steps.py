"""
Step wrappers and timing helpers.

Higher-order functions that take an action and a label and return a wrapped
action, used in place of decorators around test steps.
"""

import functools
import random
import string
import time
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from ..core.logging_config import LoggerLike, child_logger

T = TypeVar("T")


def with_error_handling(
    action: Callable[..., Awaitable[T]],
    step_name: str,
    logger: Optional[LoggerLike] = None,
) -> Callable[..., Awaitable[T]]:
    """
    Wrap a coroutine function with start/finish/failure logging.

    The wrapped action re-raises whatever ``action`` raises.
    """
    log = child_logger(logger, "steps")

    @functools.wraps(action)
    async def wrapped(*args: Any, **kwargs: Any) -> T:
        log.debug(f"Start: {step_name}")
        try:
            result = await action(*args, **kwargs)
        except Exception:
            log.error(f'Error in "{step_name}"', exc_info=True)
            raise
        log.debug(f"Done: {step_name}")
        return result

    return wrapped


async def measure_execution_time(
    operation: Callable[[], Awaitable[T]],
    operation_name: str,
    logger: Optional[LoggerLike] = None,
) -> Tuple[T, float]:
    """
    Await ``operation`` and measure how long it took.

    Returns:
        Tuple of the operation result and its duration in milliseconds
    """
    log = child_logger(logger, "timing")
    start_time = time.perf_counter()

    result = await operation()
    duration_ms = (time.perf_counter() - start_time) * 1000

    log.debug(
        f"{operation_name}: {duration_ms:.0f}ms",
        extra={"duration": duration_ms},
    )
    return result, duration_ms


def generate_test_id(prefix: str = "test") -> str:
    """Unique identifier for test data, e.g. ``test_1700000000000_k3x9qa``."""
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}_{timestamp}_{suffix}"
