"""
Screenshot and video capture with structured artifact names.

Every artifact is written below ``root_dir`` at the path produced by the
artifact namer and attached to the Allure report.
"""

from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar, Union

import allure
from playwright.async_api import BrowserContext, Page

from ..artifacts.models import ArtifactType, CaseMetadata
from ..artifacts.naming import (
    browser_display_name,
    format_test_name_for_report,
    name_for,
    status_display_name,
    video_name_for,
)
from ..core.exceptions import ArtifactError
from ..core.logging_config import LoggerLike, child_logger
from .allure_helper import attach_file, attach_text

T = TypeVar("T")

STEP_STATES = ("before", "after", "error")


class ArtifactCapture:
    """
    Saves screenshots and videos of a test run under one root directory.

    Paths are relative to ``root_dir`` and follow
    ``category/project/{test_id}_{slug}[_{step}]_{viewport}_{type}_{timestamp}.{ext}``.
    """

    def __init__(self, root_dir: Union[str, Path], logger: Optional[LoggerLike] = None):
        self.root_dir = Path(root_dir)
        self.logger = child_logger(logger, "capture")

    def _prepare_path(self, relative_name: str) -> Path:
        target = self.root_dir / relative_name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactError(
                f"Cannot create artifact directory: {e}",
                file_path=str(target.parent),
                operation="mkdir",
            ) from e
        return target

    @staticmethod
    def attachment_name(
        metadata: CaseMetadata,
        artifact_type: ArtifactType,
        step_label: Optional[str] = None,
    ) -> str:
        """Report name such as ``[Chrome] failure - on failure``."""
        browser = browser_display_name(metadata.project_name)
        step = f" - {step_label}" if step_label else ""
        return f"[{browser}] {artifact_type.value}{step}"

    async def save_screenshot(
        self,
        page: Page,
        metadata: CaseMetadata,
        artifact_type: ArtifactType = ArtifactType.STEP,
        step_label: Optional[str] = None,
        full_page: bool = True,
        element: Optional[str] = None,
    ) -> Path:
        """
        Take a screenshot, store it under its structured name and attach it.

        Args:
            page: Page to capture
            metadata: Metadata of the running test
            artifact_type: Kind of screenshot
            step_label: Optional step description
            full_page: Capture the full scrollable page
            element: Selector of an element to capture instead of the page

        Returns:
            Path of the written screenshot
        """
        target = self._prepare_path(name_for(metadata, artifact_type, step_label))

        if element:
            await page.locator(element).first.screenshot(path=str(target))
        else:
            await page.screenshot(path=str(target), full_page=full_page)

        self.logger.info(
            f"Captured {target.relative_to(self.root_dir).as_posix()}",
            extra={"metadata": {"artifact_type": artifact_type.value}},
        )
        attach_file(self.attachment_name(metadata, artifact_type, step_label), str(target))
        return target

    async def save_failure_screenshot(
        self,
        page: Page,
        metadata: CaseMetadata,
        error_message: Optional[str] = None,
    ) -> Path:
        """Screenshot the failed state; the error message is attached as text."""
        path = await self.save_screenshot(
            page, metadata, ArtifactType.FAILURE, "on failure"
        )
        if error_message:
            attach_text("Error description", error_message)
        return path

    async def save_step_screenshot(
        self, page: Page, metadata: CaseMetadata, step_name: str
    ) -> Path:
        return await self.save_screenshot(page, metadata, ArtifactType.STEP, step_name)

    async def capture_step(
        self, page: Page, metadata: CaseMetadata, step_name: str, state: str
    ) -> Path:
        """Screenshot a step in one of the ``before``/``after``/``error`` states."""
        if state not in STEP_STATES:
            raise ValueError(f"Unknown step state: {state}")
        return await self.save_screenshot(
            page, metadata, ArtifactType.STEP, f"{state} {step_name}"
        )

    async def with_visual_capture(
        self,
        page: Page,
        metadata: CaseMetadata,
        step_name: str,
        action: Callable[[], Awaitable[T]],
    ) -> T:
        """Run ``action`` with before/after screenshots, or an error screenshot on failure."""
        await self.capture_step(page, metadata, step_name, "before")
        try:
            result = await action()
        except Exception:
            await self.capture_step(page, metadata, step_name, "error")
            raise
        await self.capture_step(page, metadata, step_name, "after")
        return result

    async def log_test_step(
        self,
        page: Page,
        metadata: CaseMetadata,
        step_name: str,
        action: Callable[[], Awaitable[None]],
        screenshot: bool = False,
    ) -> None:
        """Run ``action`` as an Allure step; a failure is screenshotted before re-raising."""
        with allure.step(step_name):
            try:
                await action()
            except Exception as error:
                self.logger.error(f"Step failed: {step_name}")
                await self.save_failure_screenshot(page, metadata, str(error))
                raise
        if screenshot:
            await self.save_step_screenshot(page, metadata, step_name)

    async def save_video(self, page: Page, metadata: CaseMetadata) -> Optional[Path]:
        """
        Store the page's video under its structured name.

        Must be called after the page's context is closed. Returns None when
        the context was not recording.
        """
        video = page.video
        if video is None:
            return None

        target = self._prepare_path(video_name_for(metadata))
        await video.save_as(str(target))
        self.logger.info(f"Saved video {target.relative_to(self.root_dir).as_posix()}")
        attach_file(
            self.attachment_name(metadata, ArtifactType.VIDEO),
            str(target),
            allure.attachment_type.WEBM,
        )
        return target

    async def save_trace(self, context: BrowserContext, metadata: CaseMetadata) -> Path:
        """Stop the context's tracing and store the trace archive under its structured name."""
        target = self._prepare_path(name_for(metadata, ArtifactType.TRACE))
        await context.tracing.stop(path=str(target))
        self.logger.info(f"Saved trace {target.relative_to(self.root_dir).as_posix()}")
        return target


def generate_test_summary(
    metadata: CaseMetadata,
    status: str,
    duration_s: Optional[float] = None,
    retries: int = 0,
) -> str:
    """Plain-text summary of a finished test for the report."""
    duration = f"{duration_s:.2f}s" if duration_s is not None else "N/A"
    return "\n".join(
        [
            f"Test: {format_test_name_for_report(metadata)}",
            f"Browser: {browser_display_name(metadata.project_name)}",
            f"Status: {status_display_name(status)}",
            f"Duration: {duration}",
            f"Retries: {retries}",
        ]
    )
