"""Browser-level utilities: selectors, waits, clipboard."""

from .clipboard import (
    CopyStrategy,
    DEFAULT_STRATEGIES,
    ClipboardCopyError,
    copy_to_clipboard,
    read_from_clipboard,
)
from .helpers import (
    wait_for_page_ready,
    safe_get_text,
    has_horizontal_scroll,
    get_viewport_size,
)
from .selectors import SELECTORS, get_selector
from .waits import (
    wait_for_element_ready,
    wait_for_element_with_retry,
    wait_for_element_hidden,
    wait_for_clickable,
    wait_for_condition,
    wait_for_text,
    wait_for_url_change,
)

__all__ = [
    "CopyStrategy",
    "DEFAULT_STRATEGIES",
    "ClipboardCopyError",
    "copy_to_clipboard",
    "read_from_clipboard",
    "wait_for_page_ready",
    "safe_get_text",
    "has_horizontal_scroll",
    "get_viewport_size",
    "SELECTORS",
    "get_selector",
    "wait_for_element_ready",
    "wait_for_element_with_retry",
    "wait_for_element_hidden",
    "wait_for_clickable",
    "wait_for_condition",
    "wait_for_text",
    "wait_for_url_change",
]
