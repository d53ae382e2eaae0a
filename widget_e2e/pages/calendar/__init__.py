"""Calendar page objects."""

from .actions import CalendarActions
from .assertions import CalendarAssertions
from .calendar_page import CalendarPage

__all__ = ["CalendarActions", "CalendarAssertions", "CalendarPage"]
