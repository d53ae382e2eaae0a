"""
Events Widget E2E - browser test suite for the events calendar widget page

Drives a real browser through Playwright, asserts on the widget generator page
and produces Allure reports with structured screenshot artifacts.
"""

__version__ = "0.1.0"
__author__ = "Widget QA Team"

from .core.config import Config
from .core.exceptions import WidgetE2EError
from .core.logging_config import setup_logging

__all__ = [
    "Config",
    "WidgetE2EError",
    "setup_logging",
]
