"""
Base page object.

Holds the page, the run configuration and the injected run logger, and
provides navigation and element helpers shared by all page objects.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from ..browser.helpers import get_viewport_size, has_horizontal_scroll, wait_for_page_ready
from ..core.config import Config
from ..core.exceptions import NavigationError
from ..core.logging_config import LoggerLike, child_logger, log_step, log_success
from ..data.test_data import TIMEOUTS


class BasePage(ABC):
    """Common behaviour of all page objects."""

    def __init__(self, page: Page, config: Config, logger: Optional[LoggerLike] = None):
        self.page = page
        self.config = config
        self.timeouts = config.profile.timeouts
        self.logger = child_logger(logger, self.__class__.__name__)

    @property
    @abstractmethod
    def path(self) -> str:
        """Path of the page relative to the base URL."""

    @property
    def url(self) -> str:
        return f"{self.config.effective_base_url}{self.path}"

    @property
    def current_url(self) -> str:
        return self.page.url

    async def navigate(self) -> None:
        """
        Open the page and wait until it is ready.

        Raises:
            NavigationError: If the server answers with HTTP 400 or above
        """
        log_step(self.logger, f"Navigate to {self.path}")

        response = await self.page.goto(
            self.url, wait_until="domcontentloaded", timeout=self.timeouts.page_load
        )
        if response is not None and response.status >= 400:
            raise NavigationError(
                f"Page returned HTTP {response.status}",
                url=self.url,
                status=response.status,
            )

        await wait_for_page_ready(self.page, self.timeouts, self.logger)
        log_success(self.logger, "Page loaded")

    async def get_http_status(self) -> int:
        """HTTP status of a fresh navigation, 0 when there was no response."""
        response = await self.page.goto(
            self.url, wait_until="domcontentloaded", timeout=self.timeouts.page_load
        )
        return response.status if response is not None else 0

    async def get_title(self) -> str:
        return await self.page.title()

    async def is_element_visible(self, locator: Locator, timeout: int = TIMEOUTS["SHORT"]) -> bool:
        """Whether ``locator`` becomes visible within ``timeout`` ms."""
        try:
            await locator.first.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightError:
            return False

    async def has_no_horizontal_scroll(self) -> bool:
        return not await has_horizontal_scroll(self.page)

    async def get_viewport(self) -> Dict[str, int]:
        return await get_viewport_size(self.page)

    async def wait_for_element(self, locator: Locator, timeout: int = TIMEOUTS["DEFAULT"]) -> None:
        await locator.wait_for(state="visible", timeout=timeout)

    async def safe_click(self, locator: Locator) -> None:
        """Click once the element is visible."""
        await locator.wait_for(state="visible", timeout=TIMEOUTS["DEFAULT"])
        await locator.click()

    async def get_text(self, locator: Locator) -> str:
        await locator.wait_for(state="visible", timeout=TIMEOUTS["DEFAULT"])
        return await locator.text_content() or ""

    async def collect_console_errors(self, wait_ms: int = 500) -> List[str]:
        """Console errors emitted while waiting ``wait_ms`` milliseconds."""
        errors: List[str] = []

        def on_console(message) -> None:
            if message.type == "error":
                errors.append(message.text)

        self.page.on("console", on_console)
        try:
            await self.page.wait_for_timeout(wait_ms)
        finally:
            self.page.remove_listener("console", on_console)
        return errors

    async def check_basic_accessibility(self) -> Dict[str, bool]:
        """Alt texts on images, ``lang`` on ``<html>`` and a main landmark."""
        images_without_alt = await self.page.locator("img:not([alt])").count()
        has_lang = await self.page.locator("html[lang]").count() > 0
        has_main = await self.page.locator('main, [role="main"]').count() > 0

        return {
            "has_alt_texts": images_without_alt == 0,
            "has_lang_attribute": has_lang,
            "has_main_landmark": has_main,
        }
