"""
High-level calendar flows: navigation and event create/edit/delete.
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from ...core.config import Config
from ...core.logging_config import LoggerLike, child_logger, log_success
from ...data.test_data import EventData
from ...reliability.retry import RetryOptions, with_retry
from ...reporting.allure_helper import attach_json, step
from .calendar_page import CalendarPage

MAX_MONTH_STEPS = 24
MONTH_ANIMATION_MS = 300

CONFIRM_DELETE_SELECTOR = (
    '[data-testid="modal-confirm"], .confirm-delete, button:has-text("Удалить")'
)


def _month_start(month: str, year: str) -> Optional[datetime]:
    try:
        return datetime.strptime(f"{month.strip()} {year.strip()}", "%B %Y")
    except ValueError:
        return None


class CalendarActions:
    """Calendar business flows on top of ``CalendarPage``."""

    def __init__(self, page: Page, config: Config, logger: Optional[LoggerLike] = None):
        self.page = page
        self.calendar = CalendarPage(page, config, logger)
        self.logger = child_logger(logger, "CalendarActions")
        self.retry_options = RetryOptions(max_attempts=3, delay_ms=500)

    async def _retry_click(self, locator, operation_name: str) -> None:
        async def click() -> None:
            await self.calendar.safe_click(locator)

        await with_retry(
            click, replace(self.retry_options, operation_name=operation_name), self.logger
        )

    async def open_calendar(self) -> None:
        with step("Open calendar"):
            await self.calendar.navigate()
            await self.calendar.wait_for_calendar_ready()

    async def navigate_to_month(self, target_month: str, target_year: str) -> None:
        """
        Page through months until ``target_month target_year`` is displayed.

        Raises:
            RuntimeError: If the month is not reached within two years of paging
        """
        with step(f"Navigate to {target_month} {target_year}"):
            target = _month_start(target_month, target_year)

            for _ in range(MAX_MONTH_STEPS):
                month = await self.calendar.current_month()
                year = await self.calendar.current_year()
                if target_month.lower() in month.lower() and target_year in year:
                    log_success(self.logger, f"Reached {target_month} {target_year}")
                    return

                current = _month_start(month, year)
                if target is None or current is None or target > current:
                    await self.calendar.go_to_next_month()
                else:
                    await self.calendar.go_to_previous_month()
                await self.page.wait_for_timeout(MONTH_ANIMATION_MS)

            raise RuntimeError(f"Could not navigate to {target_month} {target_year}")

    async def _fill(self, locator, value: str) -> None:
        await self.calendar.wait_for_element(locator.first)
        await locator.first.clear()
        await locator.first.fill(value)

    async def fill_event_form(self, data: EventData) -> None:
        with step("Fill event form"):
            attach_json("Event data", data.model_dump(exclude_none=True))
            await self.calendar.wait_for_event_form()
            await self._apply_fields(data.model_dump())

    async def _apply_fields(self, fields: Dict[str, Optional[str]]) -> None:
        inputs = {
            "title": self.calendar.title_input,
            "start_date": self.calendar.start_date_input,
            "description": self.calendar.description_input,
            "end_date": self.calendar.end_date_input,
            "start_time": self.calendar.start_time_input,
            "end_time": self.calendar.end_time_input,
        }
        for name, locator in inputs.items():
            if fields.get(name):
                await self._fill(locator, fields[name])

        if fields.get("color"):
            await self.calendar.wait_for_element(self.calendar.color_picker.first)
            await self.calendar.color_picker.first.fill(fields["color"])

    async def submit_event_form(self) -> None:
        with step("Submit event form"):
            await self._retry_click(self.calendar.submit_button.first, "submit event form")

    async def cancel_event_form(self) -> None:
        with step("Cancel event form"):
            await self.calendar.safe_click(self.calendar.cancel_button.first)

    async def create_event(self, data: EventData) -> None:
        with step(f"Create event: {data.title}"):
            await self.calendar.click_day(data.start_date)
            await self.fill_event_form(data)
            await self.submit_event_form()
            try:
                await self.page.wait_for_load_state("networkidle")
            except PlaywrightError:
                self.logger.debug("networkidle not reached after submit")
            log_success(self.logger, f'Event "{data.title}" created')

    async def edit_event(self, event_id: Union[str, int], **changes: str) -> None:
        """Open an event and overwrite the given fields, e.g. ``title="New"``."""
        with step(f"Edit event {event_id}"):
            await self.calendar.click_event(event_id)
            await self.calendar.wait_for_event_form()
            await self._apply_fields(changes)
            await self.submit_event_form()
            log_success(self.logger, f"Event {event_id} updated")

    async def delete_event(self, event_id: Union[str, int]) -> None:
        with step(f"Delete event {event_id}"):
            await self.calendar.click_event(event_id)
            await self.calendar.wait_for_event_form()
            await self._retry_click(self.calendar.delete_button.first, "delete event")

            confirm = self.page.locator(CONFIRM_DELETE_SELECTOR).first
            if await self.calendar.is_element_visible(confirm):
                await confirm.click()
            log_success(self.logger, f"Event {event_id} deleted")

    async def sync_calendar(self) -> None:
        with step("Sync calendar"):
            await self.calendar.click_sync_button()
            await self.calendar.wait_for_sync_complete()
