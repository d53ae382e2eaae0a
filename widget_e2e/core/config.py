"""
Configuration management for the events widget e2e suite.

Handles environment variables, defaults, and configuration validation
for test runs.
"""

import os
import uuid
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from pathlib import Path

from .environments import EnvironmentProfile, load_environment_profiles

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARN", "WARNING", "ERROR"]


@dataclass
class Config:
    """Configuration class for test runs with environment variable support."""

    # Environment detection
    ci_mode: bool = field(default=False)
    environment: Optional[str] = field(default=None)
    base_url: Optional[str] = field(default=None)

    # Execution settings
    headless_mode: Optional[bool] = field(default=None)

    # Logging configuration
    log_level: str = field(default="INFO")
    log_format: str = field(default="text")

    # Run correlation
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    # Directory paths
    project_root: Path = field(default_factory=lambda: Path.cwd())
    reports_dir: Path = field(default_factory=lambda: Path.cwd() / "reports")
    screenshots_dir: Path = field(
        default_factory=lambda: Path.cwd() / "reports" / "screenshots"
    )
    allure_results_dir: Path = field(
        default_factory=lambda: Path.cwd() / "allure-results"
    )
    logs_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    # Optional YAML overrides for environment profiles
    environments_file: Optional[Path] = field(default=None)

    def __post_init__(self):
        """Post-initialization validation and environment overrides."""
        # CI mode
        if os.getenv("CI", "").lower() == "true" and self.ci_mode is False:
            self.ci_mode = True

        # Target environment
        if self.environment is None:
            self.environment = (
                os.getenv("WIDGET_E2E_ENV")
                or os.getenv("ENV")
                or ("ci" if self.ci_mode else "staging")
            )

        # Base URL override wins over the profile
        if self.base_url is None:
            self.base_url = os.getenv("BASE_URL") or None

        # Headless override via env
        headless_env = os.getenv("WIDGET_E2E_HEADLESS")
        if headless_env is not None:
            self.headless_mode = headless_env.lower() == "true"

        # Log level, WIDGET_E2E_LOG_LEVEL first
        log_env = os.getenv("WIDGET_E2E_LOG_LEVEL") or os.getenv("LOG_LEVEL")
        if log_env:
            self.log_level = log_env
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            self.log_level = "INFO"
        else:
            self.log_level = self.log_level.upper()

        # JSON logs in CI unless explicitly set otherwise
        if self.ci_mode and self.log_format == "text":
            self.log_format = "json"

        run_id_env = os.getenv("TEST_RUN_ID")
        if run_id_env:
            self.run_id = run_id_env

        environments_env = os.getenv("WIDGET_E2E_ENVIRONMENTS_FILE")
        if environments_env and self.environments_file is None:
            self.environments_file = Path(environments_env)

        self._profiles: Optional[Dict[str, EnvironmentProfile]] = None

    @property
    def profiles(self) -> Dict[str, EnvironmentProfile]:
        """All known environment profiles (built-in plus YAML overrides)."""
        if self._profiles is None:
            self._profiles = load_environment_profiles(self.environments_file)
        return self._profiles

    @property
    def profile(self) -> EnvironmentProfile:
        """Profile of the current environment; unknown names fall back to staging."""
        return self.profiles.get(self.environment, self.profiles["staging"])

    @property
    def effective_base_url(self) -> str:
        """Base URL after applying the BASE_URL override."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return self.profile.base_url

    @property
    def is_ci_mode(self) -> bool:
        """Check if running in CI environment."""
        return self.ci_mode

    @property
    def debug_enabled(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"

    def get_effective_headless_mode(self) -> bool:
        """Get effective headless mode based on CI, override and profile."""
        if self.headless_mode is not None:
            return self.headless_mode
        if self.ci_mode:
            return True
        return self.profile.headless

    def get_log_file_path(self) -> Path:
        """Get the main log file path."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        return self.logs_dir / "widget-e2e.log"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "ci_mode": self.ci_mode,
            "environment": self.environment,
            "base_url": self.effective_base_url,
            "headless_mode": self.get_effective_headless_mode(),
            "log_level": self.log_level,
            "log_format": self.log_format,
            "run_id": self.run_id,
            "project_root": str(self.project_root),
            "reports_dir": str(self.reports_dir),
            "screenshots_dir": str(self.screenshots_dir),
            "allure_results_dir": str(self.allure_results_dir),
            "logs_dir": str(self.logs_dir),
        }

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(ci_mode=os.getenv("CI", "").lower() == "true")

    def validate(self) -> None:
        """Validate configuration and raise ValidationError if invalid."""
        from .exceptions import ValidationError

        errors = []

        if self.environment not in self.profiles:
            errors.append(
                f"Unknown environment: {self.environment}. "
                f"Must be one of {sorted(self.profiles)}"
            )

        if self.base_url and not self.base_url.startswith(("http://", "https://")):
            errors.append(f"Invalid base URL: {self.base_url}")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

        if errors:
            message = "Configuration validation failed: " + "; ".join(errors)
            raise ValidationError(
                message,
                validation_type="config",
                violations=errors,
            )
