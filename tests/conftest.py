"""
Pytest configuration and shared fixtures for the events widget suite.

Registers the ``--run-e2e`` and ``--project`` options, keeps browser suites
out of plain unit runs and provides Playwright doubles for unit tests.
"""

import logging
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from widget_e2e.artifacts.models import CaseMetadata
from widget_e2e.core.config import Config
from widget_e2e.core.environments import DEFAULT_PROJECTS, get_project

from doubles import make_page

ENV_VARS = (
    "CI",
    "ENV",
    "BASE_URL",
    "LOG_LEVEL",
    "TEST_RUN_ID",
    "WIDGET_E2E_ENV",
    "WIDGET_E2E_HEADLESS",
    "WIDGET_E2E_LOG_LEVEL",
    "WIDGET_E2E_ENVIRONMENTS_FILE",
)


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run browser tests against the live widget page",
    )
    parser.addoption(
        "--project",
        default="chromium",
        choices=sorted(DEFAULT_PROJECTS),
        help="Browser project for e2e tests (default: chromium)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests without --run-e2e; apply the project's tag filter."""
    if not config.getoption("--run-e2e"):
        skip_e2e = pytest.mark.skip(reason="needs --run-e2e")
        for item in items:
            if item.get_closest_marker("e2e"):
                item.add_marker(skip_e2e)
        return

    project = get_project(config.getoption("--project"))
    if not project.grep_tags:
        return

    selected, deselected = [], []
    for item in items:
        if any(item.get_closest_marker(tag) for tag in project.grep_tags):
            selected.append(item)
        else:
            deselected.append(item)
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


@pytest.fixture
def clean_env(monkeypatch):
    """Remove suite environment variables so Config sees only defaults."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def temp_config(clean_env, tmp_path: Path) -> Config:
    """Configuration writing everything below a temporary directory."""
    return Config(
        project_root=tmp_path,
        reports_dir=tmp_path / "reports",
        screenshots_dir=tmp_path / "reports" / "screenshots",
        allure_results_dir=tmp_path / "allure-results",
        logs_dir=tmp_path / "logs",
    )


@pytest.fixture
def test_logger() -> logging.Logger:
    logger = logging.getLogger("widget_e2e.run.unittest")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def smoke_metadata() -> CaseMetadata:
    return CaseMetadata(
        title="SMOKE-01: Страница загружается успешно",
        file_path="/repo/tests/e2e/smoke/test_basic_rendering.py",
        project_name="chromium",
        viewport={"width": 1920, "height": 1080},
    )


@pytest.fixture
def fake_page() -> MagicMock:
    return make_page()


@pytest.fixture
def fake_context() -> MagicMock:
    context = MagicMock(name="context")
    context.grant_permissions = AsyncMock()
    return context
