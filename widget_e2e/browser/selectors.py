"""
Central registry of element selectors for the events widget page.

Preference order when adding selectors: data-testid attributes, semantic
roles and ARIA labels, stable texts, then CSS classes.
"""

from typing import Any, Dict

from ..core.exceptions import ValidationError

SELECTORS: Dict[str, Dict[str, str]] = {
    "PAGE": {
        "MAIN_CONTENT": "main, .main-content, #content, article",
        "PAGE_TITLE": "h1",
        "WIDGET_SECTION": ".widget-section, .events-widget, section",
    },
    "WIDGET": {
        "HEADING": 'text="Нравится наш календарь мероприятий?"',
        "HEADING_PARTIAL": "text=/календарь мероприятий/i",
        "DESCRIPTION": 'text="Хочешь такой же?"',
        "DESCRIPTION_PARTIAL": "text=/такой же/i",
        "FORM_CONTAINER": "form, .widget-form, .generator-form",
        "EMBED_CODE_FIELD": 'textarea, input[type="text"][readonly], .embed-code, code',
        "COPY_BUTTON": (
            'button:has-text("копировать"), button:has-text("Копировать"), '
            '[data-action="copy"]'
        ),
        "DESIGN_SELECTOR": 'select, .design-selector, [data-type="design"]',
        "PREVIEW": ".preview, .widget-preview, iframe",
    },
    "NAVIGATION": {
        "MAIN_MENU": "nav, .navigation, .menu",
        "EVENTS_LINK": 'a[href*="activity"], a:has-text("мероприятий")',
        "LANGUAGE_SWITCHER": '.language-switcher, [data-lang], a[href*="/en/"]',
    },
    "FOOTER": {
        "CONTAINER": "footer, .footer",
        "COPYRIGHT": ".copyright, text=/3SNET/i",
    },
    "COMMON": {
        "LOADING": '.loading, .spinner, [aria-busy="true"]',
        "ERROR_MESSAGE": '.error, .alert-error, [role="alert"]',
        "SUCCESS_MESSAGE": ".success, .alert-success",
    },
}


def get_selector(path: str) -> str:
    """
    Resolve a dotted selector path such as ``WIDGET.HEADING``.

    Raises:
        ValidationError: If the path is unknown or does not end at a selector
    """
    result: Any = SELECTORS
    for part in path.split("."):
        if isinstance(result, dict) and part in result:
            result = result[part]
        else:
            raise ValidationError(
                f"Selector not found: {path}",
                validation_type="selector",
                violations=[path],
            )

    if not isinstance(result, str):
        raise ValidationError(
            f"Invalid selector path: {path}",
            validation_type="selector",
            violations=[path],
        )

    return result
