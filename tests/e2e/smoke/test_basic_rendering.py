"""
Smoke tests for the events widget page.

Basic availability and critical page elements. Priority P0.
"""

import re

import pytest

from widget_e2e.core.logging_config import log_step
from widget_e2e.data.test_data import URLS
from widget_e2e.reporting import allure_helper

pytestmark = [pytest.mark.e2e, pytest.mark.smoke, pytest.mark.critical]

IGNORED_CONSOLE_ERRORS = ("favicon", "CORS", "net::ERR")


class TestBasicRendering:
    """Page loads and shows its key elements."""

    @pytest.mark.title("SMOKE-01: Страница загружается с HTTP статусом 200")
    async def test_page_returns_200(self, page, config):
        allure_helper.set_severity("blocker")
        response = await page.goto(f"{config.effective_base_url}{URLS['EVENTS_WIDGET']}")

        assert response is not None
        assert response.status == 200

    @pytest.mark.title("SMOKE-02: Основной заголовок отображается корректно")
    async def test_main_heading_visible(self, widget_page):
        assert await widget_page.is_main_heading_visible()

        heading = await widget_page.get_main_heading_text()
        assert "календарь мероприятий" in heading.lower()

    @pytest.mark.title("SMOKE-03: Описательный текст присутствует на странице")
    async def test_description_visible(self, widget_page):
        assert await widget_page.is_description_visible()

    @pytest.mark.title("SMOKE-04: Заголовок страницы соответствует ожиданиям")
    async def test_document_title(self, widget_page):
        title = await widget_page.get_title()
        assert re.search("календар", title.lower())

    @pytest.mark.title("SMOKE-05: Футер страницы отображается")
    async def test_footer_visible(self, widget_page, page):
        if await widget_page.is_footer_visible():
            return

        # No footer landmark: the page must at least render something at the bottom
        await page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        assert await page.locator("body > *:last-child").count() > 0

    @pytest.mark.title("SMOKE-06: Страница не содержит критических ошибок в консоли")
    async def test_no_console_errors(self, widget_page, run_logger):
        log_step(run_logger, "Collect console errors")
        errors = await widget_page.collect_console_errors(wait_ms=1000)

        critical = [
            error
            for error in errors
            if not any(ignored in error for ignored in IGNORED_CONSOLE_ERRORS)
        ]
        assert critical == []

    @pytest.mark.title("SMOKE-07: Ссылка на календарь мероприятий присутствует")
    async def test_calendar_link_present(self, widget_page, page):
        if await widget_page.is_calendar_link_visible():
            return
        assert await page.locator("a[href]").count() > 0

    @pytest.mark.title("SMOKE-08: URL страницы корректный после загрузки")
    async def test_url_after_load(self, widget_page):
        assert "eventswidget" in widget_page.current_url
