"""Core components for the events widget e2e suite."""

from .config import Config
from .environments import (
    BrowserProject,
    EnvironmentProfile,
    DEFAULT_PROFILES,
    DEFAULT_PROJECTS,
    get_project,
    load_environment_profiles,
)
from .exceptions import (
    WidgetE2EError,
    ValidationError,
    NavigationError,
    ElementNotFoundError,
    ArtifactError,
)
from .logging_config import setup_logging, get_logger, child_logger

__all__ = [
    "Config",
    "BrowserProject",
    "EnvironmentProfile",
    "DEFAULT_PROFILES",
    "DEFAULT_PROJECTS",
    "get_project",
    "load_environment_profiles",
    "WidgetE2EError",
    "ValidationError",
    "NavigationError",
    "ElementNotFoundError",
    "ArtifactError",
    "setup_logging",
    "get_logger",
    "child_logger",
]
