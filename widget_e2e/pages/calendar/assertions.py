"""
Calendar checks built on Playwright's ``expect``.
"""

from typing import Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, expect

from ...core.config import Config
from ...core.logging_config import LoggerLike, child_logger, log_success
from ...data.test_data import TIMEOUTS
from ...reporting.allure_helper import step
from .calendar_page import CalendarPage

VALIDATION_ERROR_SELECTOR = '.error-message, [role="alert"]'

INVALID_FIELD_SCRIPT = """
el => el.classList.contains('error')
    || el.classList.contains('invalid')
    || el.getAttribute('aria-invalid') === 'true'
"""


class CalendarAssertions:
    """Assertions on calendar state; each one is reported as an Allure step."""

    def __init__(self, page: Page, config: Config, logger: Optional[LoggerLike] = None):
        self.page = page
        self.calendar = CalendarPage(page, config, logger)
        self.logger = child_logger(logger, "CalendarAssertions")

    async def assert_calendar_visible(self) -> None:
        with step("Calendar is visible"):
            await expect(self.calendar.calendar_container.first).to_be_visible(
                timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_event_form_visible(self) -> None:
        with step("Event form is visible"):
            await expect(self.calendar.event_form.first).to_be_visible(
                timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_event_form_hidden(self) -> None:
        with step("Event form is hidden"):
            await expect(self.calendar.event_form.first).to_be_hidden(
                timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_event_created(self, title: str) -> None:
        with step(f"Event created: {title}"):
            await expect(self.calendar.event_by_title(title).first).to_be_visible(
                timeout=TIMEOUTS["DEFAULT"]
            )
            log_success(self.logger, f'Event "{title}" present')

    async def assert_event_deleted(self, title: str) -> None:
        with step(f"Event deleted: {title}"):
            await expect(self.calendar.event_by_title(title)).to_have_count(
                0, timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_event_exists_by_id(self, event_id: Union[str, int]) -> None:
        with step(f"Event {event_id} exists"):
            await expect(self.calendar.event_by_id(event_id).first).to_be_visible(
                timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_events_count(self, expected_count: int) -> None:
        with step(f"Events count is {expected_count}"):
            await expect(self.calendar.event_items).to_have_count(
                expected_count, timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_events_count_greater_than(self, min_count: int) -> None:
        with step(f"More than {min_count} events"):
            count = await self.calendar.events_count()
            assert count > min_count, f"expected more than {min_count} events, got {count}"

    async def assert_current_month(self, expected_month: str) -> None:
        with step(f"Current month is {expected_month}"):
            month = await self.calendar.current_month()
            assert expected_month.lower() in month.lower(), (
                f"expected month {expected_month!r}, got {month!r}"
            )

    async def assert_current_year(self, expected_year: str) -> None:
        with step(f"Current year is {expected_year}"):
            year = await self.calendar.current_year()
            assert expected_year in year, f"expected year {expected_year!r}, got {year!r}"

    async def assert_sync_completed(self) -> None:
        with step("Sync completed"):
            await expect(self.calendar.sync_indicator.first).to_be_hidden(
                timeout=TIMEOUTS["NETWORK"]
            )

    async def assert_sync_status(self, expected_status: str) -> None:
        with step(f"Sync status is {expected_status}"):
            await expect(self.calendar.sync_status.first).to_contain_text(
                expected_status, timeout=TIMEOUTS["DEFAULT"]
            )

    async def assert_title_validation_error(self) -> None:
        """The title input is flagged invalid, or an error message is shown next to it."""
        with step("Title validation error shown"):
            try:
                has_error = await self.calendar.title_input.first.evaluate(INVALID_FIELD_SCRIPT)
            except PlaywrightError:
                has_error = False

            if not has_error:
                await expect(self.page.locator(VALIDATION_ERROR_SELECTOR).first).to_be_visible()

    async def assert_title_value(self, expected_value: str) -> None:
        with step(f"Title value is {expected_value}"):
            await expect(self.calendar.title_input.first).to_have_value(expected_value)
