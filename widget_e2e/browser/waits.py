"""
Explicit waits used instead of fixed sleeps.

Timeouts are in milliseconds, matching Playwright's own API.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional, Pattern, Union

from playwright.async_api import Locator, Page, expect

from ..core.logging_config import LoggerLike, child_logger
from ..data.test_data import TIMEOUTS
from ..reliability.retry import RetryOptions, with_retry

DEFAULT_TIMEOUT = TIMEOUTS["DEFAULT"]
PAGE_LOAD_TIMEOUT = TIMEOUTS["PAGE_LOAD"]

Condition = Callable[[], Union[bool, Awaitable[bool]]]


async def wait_for_element_ready(
    page: Page,
    selector: str,
    timeout: int = DEFAULT_TIMEOUT,
    state: str = "visible",
    logger: Optional[LoggerLike] = None,
) -> Locator:
    """Wait for the first match of ``selector`` to reach ``state`` and return it."""
    locator = page.locator(selector).first
    await locator.wait_for(state=state, timeout=timeout)
    child_logger(logger, "waits").debug(f"Element {selector} ready ({state})")
    return locator


async def wait_for_element_with_retry(
    page: Page,
    selector: str,
    timeout: int = DEFAULT_TIMEOUT,
    retries: int = 3,
    retry_delay: int = 500,
    logger: Optional[LoggerLike] = None,
) -> Locator:
    """
    Wait for an element to become visible, splitting ``timeout`` across retries.

    Raises:
        The last Playwright error when every attempt timed out
    """

    async def attempt() -> Locator:
        locator = page.locator(selector).first
        await locator.wait_for(state="visible", timeout=timeout / retries)
        return locator

    return await with_retry(
        attempt,
        RetryOptions(
            max_attempts=retries,
            delay_ms=retry_delay,
            operation_name=f"wait for {selector}",
        ),
        logger,
    )


async def wait_for_element_hidden(
    page: Page,
    selector: str,
    timeout: int = DEFAULT_TIMEOUT,
    logger: Optional[LoggerLike] = None,
) -> None:
    await page.locator(selector).first.wait_for(state="hidden", timeout=timeout)
    child_logger(logger, "waits").debug(f"Element {selector} hidden")


async def wait_for_clickable(
    page: Page,
    selector: str,
    timeout: int = DEFAULT_TIMEOUT,
    logger: Optional[LoggerLike] = None,
) -> Locator:
    """Wait until an element is visible and enabled."""
    locator = page.locator(selector).first
    await locator.wait_for(state="visible", timeout=timeout)
    await expect(locator).to_be_enabled(timeout=timeout)
    child_logger(logger, "waits").debug(f"Element {selector} clickable")
    return locator


async def wait_for_condition(
    condition: Condition,
    timeout: int = DEFAULT_TIMEOUT,
    interval: int = 100,
    timeout_message: str = "Condition not met within timeout",
) -> None:
    """
    Poll ``condition`` until it returns a truthy value.

    ``condition`` may be a plain or a coroutine function.

    Raises:
        TimeoutError: If the condition stays false for ``timeout`` milliseconds
    """
    deadline = time.monotonic() + timeout / 1000
    while True:
        result = condition()
        if asyncio.iscoroutine(result):
            result = await result
        if result:
            return
        if time.monotonic() >= deadline:
            raise TimeoutError(f"{timeout_message} ({timeout}ms)")
        await asyncio.sleep(interval / 1000)


async def wait_for_text(
    page: Page,
    selector: str,
    text: str,
    timeout: int = DEFAULT_TIMEOUT,
    exact: bool = False,
    logger: Optional[LoggerLike] = None,
) -> None:
    locator = page.locator(selector).first
    if exact:
        await expect(locator).to_have_text(text, timeout=timeout)
    else:
        await expect(locator).to_contain_text(text, timeout=timeout)
    child_logger(logger, "waits").debug(f'Text "{text}" found in {selector}')


async def wait_for_url_change(
    page: Page,
    contains: Optional[str] = None,
    matches: Optional[Pattern] = None,
    timeout: int = PAGE_LOAD_TIMEOUT,
    logger: Optional[LoggerLike] = None,
) -> str:
    """Wait for navigation to a URL containing ``contains`` or matching ``matches``."""
    if contains:
        await page.wait_for_url(f"**/*{contains}*", timeout=timeout)
    elif matches is not None:
        await page.wait_for_url(matches, timeout=timeout)
    else:
        await page.wait_for_url("**", timeout=timeout)

    new_url = page.url
    child_logger(logger, "waits").debug(f"URL changed to: {new_url}")
    return new_url
