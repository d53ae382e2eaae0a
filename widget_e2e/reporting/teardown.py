"""
End-of-test handling for browser pages.
"""

from typing import Optional

from playwright.async_api import BrowserContext, Page

from ..artifacts.models import CaseMetadata
from ..core.logging_config import LoggerLike
from ..reliability.errors import handle_test_error
from .capture import ArtifactCapture


async def finish_test(
    page: Page,
    context: BrowserContext,
    metadata: CaseMetadata,
    capture: ArtifactCapture,
    error: Optional[BaseException] = None,
    save_trace: bool = False,
    logger: Optional[LoggerLike] = None,
) -> None:
    """
    Report a failure and the trace, then close the context and keep its video.

    The context is always closed and the video saved, even when reporting
    the failure raises.
    """
    try:
        if error is not None:
            await handle_test_error(error, page, metadata, capture, logger)
        if save_trace:
            await capture.save_trace(context, metadata)
    finally:
        await context.close()
        await capture.save_video(page, metadata)
