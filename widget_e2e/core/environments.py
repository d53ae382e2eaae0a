"""
Environment profiles and browser projects.

Profiles describe where the suite runs (base URL, timeouts, retries) and
projects describe which browser/device a run is executed with.
"""

from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, validator, ConfigDict

from .exceptions import ValidationError


class ProfileTimeouts(BaseModel):
    """Timeouts of an environment profile, in milliseconds."""

    model_config = ConfigDict(extra="forbid")

    default: int = Field(15000, ge=0, description="Default action timeout")
    page_load: int = Field(15000, ge=0, description="Navigation timeout")
    network: int = Field(10000, ge=0, description="Network wait timeout")


class EnvironmentProfile(BaseModel):
    """Settings for one target environment."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = Field(..., description="Base URL of the site under test")
    timeouts: ProfileTimeouts = Field(default_factory=ProfileTimeouts)
    retries: int = Field(0, ge=0, le=5, description="Test retries")
    workers: Optional[int] = Field(None, ge=1, description="Parallel workers")
    headless: bool = Field(True, description="Run browsers headless")
    slow_mo: Optional[int] = Field(None, ge=0, description="Slow motion delay (ms)")

    @validator("base_url")
    def validate_base_url(cls, v):
        if not v or not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must start with http:// or https://: {v}")
        return v.rstrip("/")


DEFAULT_PROFILES: Dict[str, EnvironmentProfile] = {
    "development": EnvironmentProfile(
        base_url="http://localhost:3000",
        timeouts=ProfileTimeouts(default=30000, page_load=20000, network=15000),
        retries=0,
        workers=1,
        headless=False,
        slow_mo=100,
    ),
    "staging": EnvironmentProfile(
        base_url="https://dev.3snet.info",
        timeouts=ProfileTimeouts(default=20000, page_load=15000, network=10000),
        retries=1,
        workers=2,
        headless=True,
    ),
    "production": EnvironmentProfile(
        base_url="https://3snet.info",
        timeouts=ProfileTimeouts(default=15000, page_load=10000, network=8000),
        retries=2,
        workers=4,
        headless=True,
    ),
    "ci": EnvironmentProfile(
        base_url="https://dev.3snet.info",
        timeouts=ProfileTimeouts(default=30000, page_load=15000, network=10000),
        retries=2,
        workers=2,
        headless=True,
    ),
}


def load_environment_profiles(
    path: Optional[Union[str, Path]] = None,
) -> Dict[str, EnvironmentProfile]:
    """
    Load environment profiles, merging a YAML file over the built-in ones.

    The file maps profile names to profile fields; fields missing from a
    known profile keep their built-in values.

    Args:
        path: Optional path to a YAML file

    Returns:
        Mapping of profile name to profile

    Raises:
        ValidationError: If the file cannot be parsed or a profile is invalid
    """
    profiles = dict(DEFAULT_PROFILES)
    if path is None:
        return profiles

    profile_path = Path(path)
    if not profile_path.exists():
        raise ValidationError(
            f"Environment file not found: {profile_path}",
            validation_type="environments",
        )

    try:
        with open(profile_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValidationError(
            f"Invalid environment file {profile_path}: {e}",
            validation_type="environments",
        )

    if not isinstance(data, dict):
        raise ValidationError(
            f"Environment file must contain a mapping: {profile_path}",
            validation_type="environments",
        )

    errors = []
    for name, overrides in data.items():
        base: Dict[str, Any] = (
            profiles[name].model_dump() if name in profiles else {}
        )
        if isinstance(overrides, dict):
            timeouts = overrides.get("timeouts")
            if isinstance(timeouts, dict) and "timeouts" in base:
                overrides = {**overrides, "timeouts": {**base["timeouts"], **timeouts}}
            base.update(overrides)
        try:
            profiles[name] = EnvironmentProfile(**base)
        except ValueError as e:
            errors.append(f"{name}: {e}")

    if errors:
        raise ValidationError(
            "Environment profile validation failed: " + "; ".join(errors),
            validation_type="environments",
            violations=errors,
        )

    return profiles


class BrowserProject(BaseModel):
    """A browser/device combination a test run is executed with."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Project name used in reports and paths")
    browser: str = Field("chromium", description="Playwright browser type")
    device: Optional[str] = Field(None, description="Playwright device descriptor")
    viewport: Optional[Dict[str, int]] = Field(None, description="Viewport size")
    video: bool = Field(False, description="Record video for every test")
    grep_tags: List[str] = Field(
        default_factory=list, description="Only run tests carrying one of these tags"
    )

    @validator("browser")
    def validate_browser(cls, v):
        valid_browsers = ["chromium", "firefox", "webkit"]
        if v not in valid_browsers:
            raise ValueError(f"Browser must be one of: {valid_browsers}")
        return v

    @property
    def is_mobile(self) -> bool:
        return "mobile" in self.name

    def context_options(self, devices: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Build keyword arguments for ``browser.new_context``.

        Args:
            devices: Playwright device registry (``playwright.devices``)

        Returns:
            Context options for this project
        """
        options: Dict[str, Any] = {}
        if self.device and devices and self.device in devices:
            options.update(devices[self.device])
            # Device descriptors pin their own browser; the project decides.
            options.pop("default_browser_type", None)
        if self.viewport:
            options["viewport"] = dict(self.viewport)
        return options

    def resolved_viewport(
        self, devices: Optional[Dict[str, Dict[str, Any]]] = None
    ) -> Optional[Dict[str, int]]:
        """Viewport the context will have: explicit, else the device descriptor's."""
        viewport = self.context_options(devices).get("viewport")
        return dict(viewport) if viewport else None


DESKTOP_VIEWPORT = {"width": 1920, "height": 1080}

DEFAULT_PROJECTS: Dict[str, BrowserProject] = {
    project.name: project
    for project in [
        BrowserProject(name="chromium", browser="chromium", viewport=DESKTOP_VIEWPORT),
        BrowserProject(name="firefox", browser="firefox", viewport=DESKTOP_VIEWPORT),
        BrowserProject(name="webkit", browser="webkit", viewport=DESKTOP_VIEWPORT),
        BrowserProject(name="mobile-chrome", browser="chromium", device="Pixel 5"),
        BrowserProject(name="mobile-safari", browser="webkit", device="iPhone 12"),
        BrowserProject(
            name="critical-with-video",
            browser="chromium",
            viewport=DESKTOP_VIEWPORT,
            video=True,
            grep_tags=["video", "critical", "auth", "payment"],
        ),
    ]
}


def get_project(name: str) -> BrowserProject:
    """Look up a browser project by name."""
    if name not in DEFAULT_PROJECTS:
        raise ValidationError(
            f"Unknown browser project: {name}. "
            f"Must be one of {sorted(DEFAULT_PROJECTS)}",
            validation_type="project",
        )
    return DEFAULT_PROJECTS[name]
