"""
Base exception classes for the events widget e2e suite.

Provides a hierarchy of exceptions for the errors raised by configuration,
page objects and artifact handling.
"""

from typing import Optional, Dict, Any


class WidgetE2EError(Exception):
    """Base exception class for all suite errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class ValidationError(WidgetE2EError):
    """Raised when configuration or input validation fails."""

    def __init__(
        self,
        message: str,
        validation_type: Optional[str] = None,
        violations: Optional[list] = None,
    ):
        super().__init__(message, "VALIDATION_FAILED")
        self.validation_type = validation_type
        self.violations = violations or []
        self.context.update(
            {
                "validation_type": validation_type,
                "violations": violations,
            }
        )


class NavigationError(WidgetE2EError):
    """Raised when a page answers navigation with an HTTP error."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message, "NAVIGATION_FAILED")
        self.url = url
        self.status = status
        self.context.update(
            {
                "url": url,
                "status": status,
            }
        )


class ElementNotFoundError(WidgetE2EError):
    """Raised when no candidate locator resolves to a visible element."""

    def __init__(
        self,
        message: str,
        selector: Optional[str] = None,
    ):
        super().__init__(message, "ELEMENT_NOT_FOUND")
        self.selector = selector
        self.context.update({"selector": selector})


class ArtifactError(WidgetE2EError):
    """Raised when an artifact cannot be written."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message, "ARTIFACT_FAILED")
        self.file_path = file_path
        self.operation = operation
        self.context.update(
            {
                "file_path": file_path,
                "operation": operation,
            }
        )
