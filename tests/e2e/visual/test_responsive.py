"""
Responsive layout of the widget page across viewports and devices.

Priority P1.
"""

from contextlib import asynccontextmanager

import pytest

from widget_e2e.artifacts.models import ArtifactType
from widget_e2e.data.test_data import TIMEOUTS, VIEWPORTS
from widget_e2e.pages.events_widget_page import EventsWidgetPage

pytestmark = [pytest.mark.e2e, pytest.mark.visual]


@pytest.fixture
def widget(page, config, run_logger) -> EventsWidgetPage:
    """Widget page object, not yet navigated."""
    return EventsWidgetPage(page, config, run_logger)


@pytest.fixture
def open_on_device(playwright, browser, config, run_logger, browser_project):
    """Open the widget page in a separate context emulating a device."""
    if browser_project.browser == "firefox":
        pytest.skip("Firefox does not support isMobile device emulation")

    @asynccontextmanager
    async def opener(**context_options):
        device_context = await browser.new_context(
            base_url=config.effective_base_url, **context_options
        )
        try:
            widget = EventsWidgetPage(await device_context.new_page(), config, run_logger)
            await widget.navigate()
            yield widget
        finally:
            await device_context.close()

    return opener


class TestResponsiveViewports:
    """Viewport sizes from mobile to desktop."""

    @pytest.mark.title("VIS-01: Мобильное устройство - отсутствие горизонтального скролла")
    async def test_mobile_no_horizontal_scroll(self, page, widget):
        await page.set_viewport_size(VIEWPORTS["MOBILE"])
        await widget.navigate()

        assert await widget.has_no_horizontal_scroll()

    @pytest.mark.title("VIS-02: Мобильное устройство - все ключевые элементы видны")
    async def test_mobile_key_elements(self, page, widget):
        await page.set_viewport_size(VIEWPORTS["MOBILE"])
        await widget.navigate()

        # description and footer may sit outside the mobile viewport
        elements = await widget.are_all_key_elements_visible()
        assert elements["heading"]

    @pytest.mark.title("VIS-03: Планшет - корректное отображение")
    async def test_tablet_layout(self, page, widget):
        await page.set_viewport_size(VIEWPORTS["TABLET"])
        await widget.navigate()

        assert await widget.has_no_horizontal_scroll()
        layout = await widget.check_responsive_layout()
        assert layout["main_elements_visible"]

    @pytest.mark.title("VIS-04: Десктоп - полноценное отображение")
    async def test_desktop_layout(self, page, widget):
        await page.set_viewport_size(VIEWPORTS["DESKTOP"])
        await widget.navigate()

        elements = await widget.are_all_key_elements_visible()
        assert elements["heading"]
        assert elements["description"]

    @pytest.mark.title("VIS-05: Десктоп малый - проверка на небольших мониторах")
    async def test_small_desktop(self, page, widget):
        await page.set_viewport_size(VIEWPORTS["DESKTOP_SMALL"])
        await widget.navigate()

        assert await widget.has_no_horizontal_scroll()
        assert await widget.is_main_heading_visible()

    @pytest.mark.title("VIS-06: Проверка скриншота ключевых элементов")
    async def test_desktop_screenshot(self, page, widget, config, metadata, capture):
        if config.is_ci_mode:
            pytest.skip("Screenshots are reviewed locally")

        await page.set_viewport_size(VIEWPORTS["DESKTOP"])
        await widget.navigate()

        path = await capture.save_screenshot(
            page, metadata, ArtifactType.COMPARISON, "desktop", full_page=False
        )
        assert path.exists()


class TestDevices:
    """Emulated phones, tablets and desktop browsers."""

    @pytest.mark.title("VIS-07: iPhone 12 - полная проверка")
    async def test_iphone_12(self, playwright, open_on_device):
        async with open_on_device(**playwright.devices["iPhone 12"]) as widget:
            layout = await widget.check_responsive_layout()

        assert layout["no_horizontal_scroll"]
        assert layout["main_elements_visible"]

    @pytest.mark.title("VIS-08: iPad Pro - проверка планшетного режима")
    async def test_ipad_pro(self, playwright, open_on_device):
        async with open_on_device(**playwright.devices["iPad Pro 11"]) as widget:
            elements = await widget.are_all_key_elements_visible()

        assert elements["heading"]

    @pytest.mark.title("VIS-09: Desktop Chrome - стандартное разрешение")
    async def test_desktop_chrome(self, open_on_device):
        async with open_on_device(viewport=VIEWPORTS["DESKTOP"]) as widget:
            elements = await widget.are_all_key_elements_visible()

        assert elements["heading"]
        assert elements["description"]


class TestResize:

    @pytest.mark.title("VIS-10: Изменение размера окна не ломает верстку")
    async def test_resize_keeps_layout(self, page, widget):
        await page.set_viewport_size(VIEWPORTS["DESKTOP"])
        await widget.navigate()

        for viewport in (VIEWPORTS["TABLET"], VIEWPORTS["MOBILE"]):
            await page.set_viewport_size(viewport)
            await page.wait_for_timeout(TIMEOUTS["ANIMATION"])
            assert await widget.has_no_horizontal_scroll(), viewport

        await page.set_viewport_size(VIEWPORTS["DESKTOP"])
        await page.wait_for_timeout(TIMEOUTS["ANIMATION"])
        assert await widget.is_main_heading_visible()
