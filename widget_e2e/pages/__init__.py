"""Page objects."""

from .base_page import BasePage
from .calendar import CalendarActions, CalendarAssertions, CalendarPage
from .events_widget_page import EventsWidgetPage

__all__ = [
    "BasePage",
    "EventsWidgetPage",
    "CalendarActions",
    "CalendarAssertions",
    "CalendarPage",
]
