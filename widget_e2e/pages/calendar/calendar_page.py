"""
Calendar page object: locators and primitive interactions.

Business flows live in ``CalendarActions``; checks in ``CalendarAssertions``.
"""

from datetime import date
from typing import Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from ...data.test_data import TIMEOUTS, URLS
from ...reporting.allure_helper import step
from ..base_page import BasePage

DateLike = Union[str, date]


class CalendarPage(BasePage):
    """Locators of the calendar widget, each a ``data-testid`` with a CSS fallback."""

    @property
    def path(self) -> str:
        return URLS["EVENTS_WIDGET"]

    def _locator(self, test_id: str, fallback: str) -> Locator:
        return self.page.locator(f'[data-testid="{test_id}"], {fallback}')

    @property
    def calendar_container(self) -> Locator:
        return self._locator("calendar-container", ".calendar, #calendar")

    @property
    def prev_month_button(self) -> Locator:
        return self._locator("calendar-nav-prev", '.nav-prev, [aria-label*="previous"]')

    @property
    def next_month_button(self) -> Locator:
        return self._locator("calendar-nav-next", '.nav-next, [aria-label*="next"]')

    @property
    def month_display(self) -> Locator:
        return self._locator("calendar-month", ".current-month")

    @property
    def year_display(self) -> Locator:
        return self._locator("calendar-year", ".current-year")

    @property
    def event_form(self) -> Locator:
        return self._locator("event-form", "form.event-form, #event-form")

    @property
    def title_input(self) -> Locator:
        return self._locator("event-title-input", 'input[name="title"], #event-title')

    @property
    def description_input(self) -> Locator:
        return self._locator(
            "event-description-input", 'textarea[name="description"], #event-description'
        )

    @property
    def start_date_input(self) -> Locator:
        return self._locator("event-start-date", 'input[name="startDate"], #start-date')

    @property
    def end_date_input(self) -> Locator:
        return self._locator("event-end-date", 'input[name="endDate"], #end-date')

    @property
    def start_time_input(self) -> Locator:
        return self._locator("event-start-time", 'input[name="startTime"], #start-time')

    @property
    def end_time_input(self) -> Locator:
        return self._locator("event-end-time", 'input[name="endTime"], #end-time')

    @property
    def color_picker(self) -> Locator:
        return self._locator("event-color-picker", 'input[type="color"], .color-picker')

    @property
    def submit_button(self) -> Locator:
        return self._locator("event-submit", 'button[type="submit"], .btn-submit')

    @property
    def cancel_button(self) -> Locator:
        return self._locator("event-cancel", "button.cancel, .btn-cancel")

    @property
    def delete_button(self) -> Locator:
        return self._locator("event-delete", "button.delete, .btn-delete")

    @property
    def event_items(self) -> Locator:
        return self._locator("event-item", ".event-item, .event")

    @property
    def sync_button(self) -> Locator:
        return self._locator("sync-button", "button.sync, .btn-sync")

    @property
    def sync_status(self) -> Locator:
        return self._locator("sync-status", ".sync-status")

    @property
    def sync_indicator(self) -> Locator:
        return self._locator("sync-indicator", ".sync-indicator, .syncing")

    def day(self, day: DateLike) -> Locator:
        date_str = day.isoformat() if isinstance(day, date) else day
        return self.page.locator(
            f'[data-testid="calendar-day-{date_str}"], [data-date="{date_str}"]'
        )

    def event_by_id(self, event_id: Union[str, int]) -> Locator:
        return self.page.locator(
            f'[data-testid="event-item-{event_id}"], [data-event-id="{event_id}"]'
        )

    def event_by_title(self, title: str) -> Locator:
        return self.event_items.filter(has_text=title)

    async def events_count(self) -> int:
        return await self.event_items.count()

    async def wait_for_calendar_ready(self, timeout: int = TIMEOUTS["DEFAULT"]) -> None:
        with step("Wait for calendar"):
            await self.calendar_container.first.wait_for(state="visible", timeout=timeout)

    async def wait_for_event_form(self, timeout: int = TIMEOUTS["DEFAULT"]) -> None:
        with step("Wait for event form"):
            await self.event_form.first.wait_for(state="visible", timeout=timeout)

    async def wait_for_sync_complete(self, timeout: int = TIMEOUTS["NETWORK"]) -> None:
        """Wait for the sync indicator to go away; it may never appear at all."""
        with step("Wait for sync to complete"):
            try:
                await self.sync_indicator.first.wait_for(state="hidden", timeout=timeout)
            except PlaywrightError:
                self.logger.debug("Sync indicator did not disappear")

    async def click_day(self, day: DateLike) -> None:
        with step(f"Click day {day}"):
            await self.safe_click(self.day(day).first)

    async def go_to_previous_month(self) -> None:
        with step("Go to previous month"):
            await self.safe_click(self.prev_month_button.first)

    async def go_to_next_month(self) -> None:
        with step("Go to next month"):
            await self.safe_click(self.next_month_button.first)

    async def current_month(self) -> str:
        return await self.get_text(self.month_display.first)

    async def current_year(self) -> str:
        return await self.get_text(self.year_display.first)

    async def click_event(self, event_id: Union[str, int]) -> None:
        with step(f"Open event {event_id}"):
            await self.safe_click(self.event_by_id(event_id).first)

    async def click_sync_button(self) -> None:
        with step("Click sync"):
            await self.safe_click(self.sync_button.first)
