"""
Page-level helpers shared by page objects and tests.
"""

from typing import Dict, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from ..core.environments import ProfileTimeouts
from ..core.logging_config import LoggerLike, child_logger
from ..data.test_data import TIMEOUTS
from .selectors import SELECTORS

LOADING_SELECTOR = SELECTORS["COMMON"]["LOADING"]


async def wait_for_page_ready(
    page: Page,
    timeouts: Optional[ProfileTimeouts] = None,
    logger: Optional[LoggerLike] = None,
) -> None:
    """
    Wait until the page has settled.

    Waits for ``networkidle``, falls back to ``domcontentloaded`` when the
    network never goes quiet, then waits for loading indicators to disappear.
    Indicators still visible after the timeout only produce a warning.
    """
    log = child_logger(logger, "page_ready")
    page_load_timeout = timeouts.page_load if timeouts else TIMEOUTS["PAGE_LOAD"]
    default_timeout = timeouts.default if timeouts else TIMEOUTS["DEFAULT"]

    try:
        await page.wait_for_load_state("networkidle", timeout=page_load_timeout)
        log.debug("networkidle reached")
    except PlaywrightTimeoutError:
        log.warning("networkidle timeout, falling back to domcontentloaded")
        await page.wait_for_load_state("domcontentloaded")

    if await page.locator(LOADING_SELECTOR).count() > 0:
        log.debug("Loading indicators present, waiting for them to disappear")
        try:
            await page.wait_for_selector(
                LOADING_SELECTOR, state="hidden", timeout=default_timeout
            )
        except PlaywrightTimeoutError:
            log.warning("Loading indicators still visible after timeout")


async def safe_get_text(page: Page, selector: str) -> Optional[str]:
    """Text of the first visible match, or None when there is none."""
    try:
        element = page.locator(selector).first
        if not await element.is_visible():
            return None
        return await element.text_content()
    except PlaywrightError:
        return None


async def has_horizontal_scroll(page: Page) -> bool:
    return await page.evaluate(
        "() => document.documentElement.scrollWidth > document.documentElement.clientWidth"
    )


async def get_viewport_size(page: Page) -> Dict[str, int]:
    return await page.evaluate(
        "() => ({ width: window.innerWidth, height: window.innerHeight })"
    )
