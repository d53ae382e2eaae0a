"""
Page object for the events calendar widget constructor page.
"""

import re
import time
from typing import Dict, List, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from ..browser.clipboard import copy_to_clipboard
from ..browser.selectors import SELECTORS
from ..data.test_data import EXPECTED_TEXTS, URLS, VALIDATION_PATTERNS
from ..core.exceptions import ElementNotFoundError
from ..core.logging_config import log_success
from .base_page import BasePage

EMBED_CODE_SELECTORS = (
    "textarea",
    "input[readonly]",
    "code",
    ".embed-code",
    "[data-code]",
)

DESIGN_OPTION_SELECTORS = (
    "select option",
    ".design-option",
    "[data-design]",
    ".theme-selector input",
)

COPY_LABEL = re.compile("копир", re.IGNORECASE)


class EventsWidgetPage(BasePage):
    """The ``/eventswidget/`` page: heading, embed code, designs and copy button."""

    @property
    def path(self) -> str:
        return URLS["EVENTS_WIDGET"]

    @property
    def main_heading(self) -> Locator:
        return self.page.locator(SELECTORS["WIDGET"]["HEADING"])

    @property
    def embed_code_field(self) -> Locator:
        return self.page.locator(SELECTORS["WIDGET"]["EMBED_CODE_FIELD"])

    @property
    def calendar_link(self) -> Locator:
        return self.page.locator(SELECTORS["NAVIGATION"]["EVENTS_LINK"]).first

    @property
    def footer(self) -> Locator:
        return self.page.locator(SELECTORS["FOOTER"]["CONTAINER"])

    def _copy_button_candidates(self) -> List[Locator]:
        return [
            self.page.locator(SELECTORS["WIDGET"]["COPY_BUTTON"]),
            self.page.get_by_role("button", name=COPY_LABEL),
            self.page.locator('[data-action="copy"], .copy-btn, .btn-copy'),
        ]

    # Visibility

    async def is_main_heading_visible(self) -> bool:
        by_text = self.page.get_by_text(EXPECTED_TEXTS["MAIN_HEADING"], exact=False)
        by_partial = self.page.locator(SELECTORS["WIDGET"]["HEADING_PARTIAL"])
        return await self.is_element_visible(by_text) or await self.is_element_visible(
            by_partial
        )

    async def get_main_heading_text(self) -> str:
        heading = self.page.locator(SELECTORS["WIDGET"]["HEADING_PARTIAL"]).first
        if await self.is_element_visible(heading):
            return await self.get_text(heading)
        return await self.get_text(self.page.locator("h1").first)

    async def is_description_visible(self) -> bool:
        by_text = self.page.get_by_text(EXPECTED_TEXTS["DESCRIPTION"], exact=False)
        by_partial = self.page.locator(SELECTORS["WIDGET"]["DESCRIPTION_PARTIAL"])
        return await self.is_element_visible(by_text) or await self.is_element_visible(
            by_partial
        )

    async def get_description_text(self) -> str:
        description = self.page.locator(SELECTORS["WIDGET"]["DESCRIPTION_PARTIAL"]).first
        if await self.is_element_visible(description):
            return await self.get_text(description)
        return ""

    async def is_calendar_link_visible(self) -> bool:
        return await self.is_element_visible(self.calendar_link)

    async def is_footer_visible(self) -> bool:
        return await self.is_element_visible(self.footer)

    # Embed code

    async def is_embed_code_field_visible(self) -> bool:
        return await self.is_element_visible(self.embed_code_field)

    async def get_embed_code(self) -> str:
        """Embed code shown on the page, or an empty string when none has code."""
        try:
            return await self.read_embed_code()
        except ElementNotFoundError as e:
            self.logger.warning(e.message)
            return ""

    async def read_embed_code(self) -> str:
        """
        Read the embed code from the first candidate field that has some.

        Form fields are read by value, other elements by text content.

        Raises:
            ElementNotFoundError: If no candidate field holds code
        """
        for selector in EMBED_CODE_SELECTORS:
            element = self.page.locator(selector).first
            if not await self.is_element_visible(element):
                continue

            tag_name = await element.evaluate("el => el.tagName.toLowerCase()")
            if tag_name in ("input", "textarea"):
                code = await element.input_value()
            else:
                code = await element.text_content()

            if code and code.strip():
                return code

        raise ElementNotFoundError(
            "Embed code field not found", selector=", ".join(EMBED_CODE_SELECTORS)
        )

    async def is_embed_code_valid(self) -> bool:
        code = await self.get_embed_code()
        return bool(code) and VALIDATION_PATTERNS["EMBED_CODE"].search(code) is not None

    async def is_copy_button_visible(self) -> bool:
        for button in self._copy_button_candidates():
            if await self.is_element_visible(button):
                return True
        return False

    async def click_copy_button(self) -> bool:
        """Click the first visible copy button candidate."""
        try:
            await self.press_copy_button()
        except ElementNotFoundError as e:
            self.logger.warning(e.message)
            return False
        return True

    async def press_copy_button(self) -> None:
        """
        Click the copy button, moving to the next candidate when a click fails.

        Raises:
            ElementNotFoundError: If no candidate is visible and clickable
        """
        for button in self._copy_button_candidates():
            try:
                if await self.is_element_visible(button):
                    await self.safe_click(button.first)
                    log_success(self.logger, "Copy button clicked")
                    return
            except PlaywrightError as e:
                self.logger.warning(f"Could not click copy button: {e}")

        raise ElementNotFoundError(
            "Copy button not found", selector=SELECTORS["WIDGET"]["COPY_BUTTON"]
        )

    async def copy_embed_code(self) -> Tuple[str, bool]:
        """
        Put the embed code on the clipboard through the fallback chain.

        Returns:
            Tuple of the embed code and whether copying succeeded
        """
        code = await self.get_embed_code()
        if not code:
            return "", False

        copied = await copy_to_clipboard(
            self.page, self.page.context, code, logger=self.logger
        )
        return code, copied

    # Designs

    async def get_available_designs(self) -> List[str]:
        """Design names from the first option group found on the page."""
        designs: List[str] = []

        for selector in DESIGN_OPTION_SELECTORS:
            elements = self.page.locator(selector)
            count = await elements.count()
            if count == 0:
                continue

            for index in range(count):
                text = await elements.nth(index).text_content()
                if text and text.strip():
                    designs.append(text.strip())
            break

        return designs

    async def select_design(self, design_index: int = 0) -> bool:
        """Select a design by index through a ``<select>`` or clickable options."""
        try:
            select = self.page.locator(SELECTORS["WIDGET"]["DESIGN_SELECTOR"]).first
            if await self.is_element_visible(select):
                if await select.locator("option").count() > design_index:
                    await select.select_option(index=design_index)
                    log_success(self.logger, f"Selected design #{design_index}")
                    return True

            options = self.page.locator(".design-option, [data-design]")
            if await options.count() > design_index:
                await options.nth(design_index).click()
                log_success(self.logger, f"Selected design #{design_index}")
                return True
        except PlaywrightError as e:
            self.logger.warning(f"Could not select design: {e}")

        return False

    # Layout

    async def check_responsive_layout(self) -> Dict[str, bool]:
        return {
            "no_horizontal_scroll": await self.has_no_horizontal_scroll(),
            "main_elements_visible": await self.is_main_heading_visible(),
            "footer_visible": await self.is_footer_visible(),
        }

    async def are_all_key_elements_visible(self) -> Dict[str, bool]:
        return {
            "heading": await self.is_main_heading_visible(),
            "description": await self.is_description_visible(),
            "footer": await self.is_footer_visible(),
        }

    # Links

    async def go_to_calendar(self) -> bool:
        """Follow the events calendar link if there is one."""
        if not await self.is_calendar_link_visible():
            return False
        await self.safe_click(self.calendar_link)
        await self.page.wait_for_load_state("domcontentloaded")
        return True

    async def get_external_links(self) -> List[str]:
        hrefs = []
        for link in await self.page.locator('a[href^="http"]').all():
            href = await link.get_attribute("href")
            if href:
                hrefs.append(href)
        return hrefs

    # Performance

    async def measure_page_load_time(self) -> float:
        """Milliseconds taken by ``navigate()``."""
        start_time = time.perf_counter()
        await self.navigate()
        return (time.perf_counter() - start_time) * 1000

    async def get_performance_metrics(self) -> Dict[str, float]:
        return await self.page.evaluate(
            """() => {
                const timing = performance.timing;
                return {
                    dom_content_loaded: timing.domContentLoadedEventEnd - timing.navigationStart,
                    load_complete: timing.loadEventEnd - timing.navigationStart,
                };
            }"""
        )
