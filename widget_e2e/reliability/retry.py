"""
Retry policy for flaky browser operations.

Wraps a zero-argument coroutine function and re-runs it with a fixed or
exponential delay until it succeeds, the attempt budget is spent, or the
retry predicate rejects the error.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from ..core.exceptions import ValidationError
from ..core.logging_config import LoggerLike, child_logger
from .errors import ErrorKind, classify

T = TypeVar("T")

ShouldRetry = Callable[[BaseException], bool]
OnRetry = Callable[[int, BaseException], None]


@dataclass(frozen=True)
class RetryOptions:
    """Configuration for one ``with_retry`` invocation."""

    max_attempts: int = 3
    delay_ms: int = 1000
    exponential_backoff: bool = False
    should_retry: Optional[ShouldRetry] = None
    on_retry: Optional[OnRetry] = None
    operation_name: str = "operation"

    def __post_init__(self):
        """Validate configuration."""
        if self.max_attempts < 1:
            raise ValidationError(
                f"max_attempts must be at least 1, got {self.max_attempts}",
                validation_type="retry_options",
            )
        if self.delay_ms < 0:
            raise ValidationError(
                f"delay_ms must be non-negative, got {self.delay_ms}",
                validation_type="retry_options",
            )


def compute_delay_ms(options: RetryOptions, attempt: int) -> int:
    """
    Delay to wait after a failed attempt.

    Args:
        options: Retry options
        attempt: 1-indexed number of the attempt that just failed

    Returns:
        Delay in milliseconds
    """
    if options.exponential_backoff:
        return options.delay_ms * (2 ** (attempt - 1))
    return options.delay_ms


def retry_on(*kinds: ErrorKind) -> ShouldRetry:
    """Build a ``should_retry`` predicate accepting only the given error kinds."""
    accepted = frozenset(kinds)

    def predicate(error: BaseException) -> bool:
        return classify(error) in accepted

    return predicate


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    options: Optional[RetryOptions] = None,
    logger: Optional[LoggerLike] = None,
) -> T:
    """
    Run ``operation`` until it succeeds or the retry budget is spent.

    Args:
        operation: Zero-argument coroutine function
        options: Retry options, defaults to ``RetryOptions()``
        logger: Run logger

    Returns:
        The operation's result

    Raises:
        The last error raised by ``operation``, unchanged
    """
    options = options or RetryOptions()
    log = child_logger(logger, "retry")

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as error:
            log.warning(
                f'Attempt {attempt}/{options.max_attempts} for '
                f'"{options.operation_name}" failed: {error}'
            )

            if attempt >= options.max_attempts:
                raise

            if options.should_retry is not None and not options.should_retry(error):
                log.debug(
                    f'Not retrying "{options.operation_name}": '
                    f"{classify(error).value} is not retryable"
                )
                raise

            if options.on_retry is not None:
                options.on_retry(attempt, error)

            delay_ms = compute_delay_ms(options, attempt)
            if delay_ms > 0:
                await asyncio.sleep(delay_ms / 1000)

            attempt += 1
