"""
Failure classification and diagnostics.

Maps a raised error's message to a coarse category used to route failures
into report buckets, and gathers page diagnostics when a test fails.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, ConfigDict

from ..core.logging_config import LoggerLike, child_logger


class ErrorKind(Enum):
    """Categories of test failures."""

    ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    ASSERTION_FAILED = "ASSERTION_FAILED"
    CLIPBOARD_ERROR = "CLIPBOARD_ERROR"
    UNKNOWN = "UNKNOWN"


# Evaluated in order, first match wins. Timeout goes first because timeout
# messages usually mention the locator or expectation that timed out too.
CLASSIFICATION_RULES: Tuple[Tuple[ErrorKind, Tuple[str, ...]], ...] = (
    (ErrorKind.TIMEOUT, ("timeout", "exceeded")),
    (ErrorKind.ELEMENT_NOT_FOUND, ("not found", "no element")),
    (ErrorKind.NETWORK_ERROR, ("network", "net::")),
    (ErrorKind.ASSERTION_FAILED, ("expect", "assertion")),
    (ErrorKind.CLIPBOARD_ERROR, ("clipboard",)),
)

PAGE_ERROR_SELECTOR = '.error, [role="alert"], .alert-danger'


def _error_message(error: Union[BaseException, str, None]) -> str:
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    try:
        return str(error)
    except Exception:
        return ""


def classify(error: Union[BaseException, str, None]) -> ErrorKind:
    """
    Classify an error by the content of its message.

    Args:
        error: Exception instance or raw error message

    Returns:
        The first matching error kind, ``ErrorKind.UNKNOWN`` otherwise
    """
    message = _error_message(error).lower()

    for kind, keywords in CLASSIFICATION_RULES:
        if any(keyword in message for keyword in keywords):
            return kind

    return ErrorKind.UNKNOWN


class ClassifiedError(BaseModel):
    """Structured record of a single test failure."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ErrorKind = Field(..., description="Coarse failure category")
    message: str = Field(..., description="Original error message")
    timestamp: str = Field(..., description="ISO-8601 time of classification")
    context: Dict[str, Any] = Field(
        default_factory=dict, description="Additional failure context"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "timestamp": self.timestamp,
            "context": dict(self.context),
        }


def create_classified_error(
    error: Union[BaseException, str],
    context: Optional[Dict[str, Any]] = None,
) -> ClassifiedError:
    """Build the failure record for an error."""
    return ClassifiedError(
        kind=classify(error),
        message=_error_message(error),
        timestamp=datetime.utcnow().isoformat() + "Z",
        context=dict(context or {}),
    )


async def collect_diagnostics(page, logger: Optional[LoggerLike] = None) -> Dict[str, Any]:
    """
    Collect page state for a failure report.

    Collection is best effort: whatever was gathered before an error is returned.
    """
    log = child_logger(logger, "diagnostics")
    diagnostics: Dict[str, Any] = {}

    try:
        diagnostics["url"] = page.url
        diagnostics["viewport"] = page.viewport_size
        diagnostics["page_error_elements_count"] = await page.locator(
            PAGE_ERROR_SELECTOR
        ).count()
        diagnostics["page_title"] = await page.title()
    except Exception as e:
        log.warning(f"Could not collect full diagnostics: {e}")

    return diagnostics


async def handle_test_error(
    error: BaseException,
    page,
    metadata,
    capture,
    logger: Optional[LoggerLike] = None,
) -> ClassifiedError:
    """
    Report a failed test: classify, log, screenshot and attach diagnostics.

    Args:
        error: The error that failed the test
        page: Playwright page the test ran on
        metadata: ``CaseMetadata`` of the failed test
        capture: ``ArtifactCapture`` used for screenshots and attachments
        logger: Run logger

    Returns:
        The classified error
    """
    from ..reporting.allure_helper import attach_json

    log = child_logger(logger, "errors")

    classified = create_classified_error(error, {"url": getattr(page, "url", None)})
    log.error(
        f'Test "{metadata.title}" failed with {classified.kind.value}',
        extra={"metadata": classified.to_dict()},
    )

    diagnostics = await collect_diagnostics(page, logger)

    try:
        await capture.save_failure_screenshot(page, metadata, classified.message)
    except Exception as e:
        log.warning(f"Could not take failure screenshot: {e}")

    attach_json(
        "Diagnostics",
        {"error": classified.to_dict(), "diagnostics": diagnostics},
    )

    return classified
