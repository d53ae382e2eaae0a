"""Retry, error classification and step wrapping."""

from .errors import (
    ErrorKind,
    ClassifiedError,
    classify,
    create_classified_error,
    collect_diagnostics,
    handle_test_error,
)
from .retry import RetryOptions, with_retry, compute_delay_ms, retry_on
from .steps import with_error_handling, measure_execution_time, generate_test_id

__all__ = [
    "ErrorKind",
    "ClassifiedError",
    "classify",
    "create_classified_error",
    "collect_diagnostics",
    "handle_test_error",
    "RetryOptions",
    "with_retry",
    "compute_delay_ms",
    "retry_on",
    "with_error_handling",
    "measure_execution_time",
    "generate_test_id",
]
