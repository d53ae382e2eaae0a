"""Static test data and generators."""

from .test_data import (
    URLS,
    EXPECTED_TEXTS,
    TIMEOUTS,
    VIEWPORTS,
    PERFORMANCE_THRESHOLDS,
    VALIDATION_PATTERNS,
    TEST_TAGS,
    WIDGET_TEST_DATA,
    TEST_EVENTS,
    EventData,
    generate_date,
    generate_event_title,
    generate_event_data,
)

__all__ = [
    "URLS",
    "EXPECTED_TEXTS",
    "TIMEOUTS",
    "VIEWPORTS",
    "PERFORMANCE_THRESHOLDS",
    "VALIDATION_PATTERNS",
    "TEST_TAGS",
    "WIDGET_TEST_DATA",
    "TEST_EVENTS",
    "EventData",
    "generate_date",
    "generate_event_title",
    "generate_event_data",
]
