"""
Browser fixtures for the e2e suites.

Each test gets its own Playwright browser and context configured from the
selected ``--project``. Failures are classified, screenshotted under a
structured name and attached to the Allure report.
"""

from typing import AsyncIterator

import pytest
import pytest_asyncio
from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from widget_e2e.artifacts.models import CaseMetadata
from widget_e2e.artifacts.naming import (
    browser_display_name,
    extract_test_id,
    format_test_name_for_report,
)
from widget_e2e.core.config import Config
from widget_e2e.core.environments import BrowserProject, get_project
from widget_e2e.core.logging_config import close_logging, setup_logging
from widget_e2e.pages.events_widget_page import EventsWidgetPage
from widget_e2e.reporting import allure_helper
from widget_e2e.reporting.capture import ArtifactCapture
from widget_e2e.reporting.teardown import finish_test

FAILED_CALL_KEY = pytest.StashKey[BaseException]()

# pytest-rerunfailures counts executions of an item from 1
FIRST_RETRY = 2


def is_first_retry(item) -> bool:
    return getattr(item, "execution_count", 1) == FIRST_RETRY


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Remember the error of a failed test call for the fixtures' teardown."""
    outcome = yield
    report = outcome.get_result()
    if report.when == "call" and report.failed and call.excinfo is not None:
        item.stash[FAILED_CALL_KEY] = call.excinfo.value


@pytest.fixture(scope="session")
def config() -> Config:
    config = Config.from_env()
    config.validate()
    return config


@pytest.fixture(scope="session")
def run_logger(config: Config):
    logger = setup_logging(config)
    logger.info(
        "Starting e2e run",
        extra={"metadata": config.to_dict()},
    )
    yield logger
    close_logging(logger)


@pytest.fixture(scope="session")
def browser_project(pytestconfig) -> BrowserProject:
    return get_project(pytestconfig.getoption("--project"))


@pytest.fixture
def metadata(request, playwright: Playwright, browser_project: BrowserProject) -> CaseMetadata:
    return CaseMetadata.from_pytest_item(
        request.node,
        browser_project.name,
        browser_project.resolved_viewport(playwright.devices),
    )


@pytest.fixture
def capture(config: Config, run_logger) -> ArtifactCapture:
    return ArtifactCapture(config.screenshots_dir, run_logger)


@pytest_asyncio.fixture
async def playwright() -> AsyncIterator[Playwright]:
    async with async_playwright() as playwright:
        yield playwright


@pytest_asyncio.fixture
async def browser(
    playwright: Playwright, config: Config, browser_project: BrowserProject
) -> AsyncIterator[Browser]:
    """Fresh browser of the project's type per test."""
    browser_type = getattr(playwright, browser_project.browser)
    browser = await browser_type.launch(
        headless=config.get_effective_headless_mode(),
        slow_mo=config.profile.slow_mo,
    )
    try:
        yield browser
    finally:
        await browser.close()


@pytest_asyncio.fixture
async def context(
    request,
    playwright: Playwright,
    browser: Browser,
    config: Config,
    browser_project: BrowserProject,
) -> BrowserContext:
    """
    Context with the project's viewport or device; closed by ``page``.

    The first rerun of a failed test records a Playwright trace.
    """
    options = browser_project.context_options(playwright.devices)
    options["base_url"] = config.effective_base_url
    if browser_project.video or request.node.get_closest_marker("video"):
        options["record_video_dir"] = str(config.reports_dir / "videos")

    browser_context = await browser.new_context(**options)
    browser_context.set_default_timeout(config.profile.timeouts.default)
    browser_context.set_default_navigation_timeout(config.profile.timeouts.page_load)
    if is_first_retry(request.node):
        await browser_context.tracing.start(screenshots=True, snapshots=True, sources=True)
    return browser_context


@pytest_asyncio.fixture
async def page(
    request,
    context: BrowserContext,
    metadata: CaseMetadata,
    capture: ArtifactCapture,
    run_logger,
) -> AsyncIterator[Page]:
    """Page of the test; reports failures, traces and the video on teardown."""
    allure_helper.set_title(format_test_name_for_report(metadata))
    allure_helper.set_label("browser", browser_display_name(metadata.project_name))
    allure_helper.set_label("testId", extract_test_id(metadata.title) or "UNKNOWN")

    browser_page = await context.new_page()
    yield browser_page

    # Reruns reuse the item, so an earlier attempt's error must not leak.
    error = request.node.stash.get(FAILED_CALL_KEY, None)
    if error is not None:
        del request.node.stash[FAILED_CALL_KEY]

    await finish_test(
        browser_page,
        context,
        metadata,
        capture,
        error=error,
        save_trace=is_first_retry(request.node),
        logger=run_logger,
    )


@pytest_asyncio.fixture
async def widget_page(page: Page, config: Config, run_logger) -> EventsWidgetPage:
    """Events widget page, already opened."""
    widget = EventsWidgetPage(page, config, run_logger)
    await widget.navigate()
    return widget
