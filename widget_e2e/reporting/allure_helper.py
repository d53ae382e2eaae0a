"""
Thin helpers over allure-pytest.

Steps, labels and attachments used by page objects and test suites. All
functions are no-ops outside a running test as far as Allure is concerned.
"""

import json
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Dict, Iterator, Optional, TypeVar, Union

import allure

T = TypeVar("T")

SEVERITIES = ("blocker", "critical", "normal", "minor", "trivial")
LABELS = ("epic", "feature", "story", "suite", "subSuite", "parentSuite")


@contextmanager
def step(name: str) -> Iterator[None]:
    """Report the enclosed block as an Allure step."""
    with allure.step(name):
        yield


async def wrap_in_step(
    step_name: str,
    action: Callable[[], Awaitable[T]],
    on_error: Optional[Callable[[BaseException], None]] = None,
) -> T:
    """
    Await ``action`` inside an Allure step.

    ``on_error`` is called with the error before it is re-raised.
    """
    with allure.step(step_name):
        try:
            return await action()
        except Exception as error:
            if on_error is not None:
                on_error(error)
            raise


def set_severity(severity: str) -> None:
    """Set the test severity, one of ``SEVERITIES``."""
    allure.dynamic.severity(allure.severity_level(severity))


def set_label(name: str, value: str) -> None:
    allure.dynamic.label(name, value)


def set_description(description: str) -> None:
    allure.dynamic.description(description)


def set_title(title: str) -> None:
    allure.dynamic.title(title)


def add_issue_link(issue_id: str, url: Optional[str] = None) -> None:
    allure.dynamic.issue(url or issue_id, issue_id)


def add_tms_link(test_id: str, url: Optional[str] = None) -> None:
    allure.dynamic.testcase(url or test_id, test_id)


def add_parameter(name: str, value: Any) -> None:
    allure.dynamic.parameter(name, str(value))


def add_parameters(params: Dict[str, Union[str, int, float, bool]]) -> None:
    for name, value in params.items():
        add_parameter(name, value)


def mark_as_flaky(reason: Optional[str] = None) -> None:
    allure.dynamic.tag("flaky")
    allure.dynamic.label("flaky_reason", reason or "Known flaky test")


def mark_as_critical() -> None:
    set_severity("critical")
    allure.dynamic.tag("critical")


def attach_text(name: str, content: str) -> None:
    allure.attach(content, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_json(name: str, data: Any) -> None:
    allure.attach(
        json.dumps(data, indent=2, ensure_ascii=False, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )


def attach_html(name: str, html: str) -> None:
    allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)


def attach_screenshot(name: str, screenshot: bytes) -> None:
    allure.attach(screenshot, name=name, attachment_type=allure.attachment_type.PNG)


def attach_file(name: str, path: str, attachment_type=allure.attachment_type.PNG) -> None:
    allure.attach.file(path, name=name, attachment_type=attachment_type)
