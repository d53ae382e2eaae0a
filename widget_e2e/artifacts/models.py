"""
Data models for artifact naming.

Defines test categories, artifact types and the per-test metadata the artifact
namer derives file names from.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, validator, ConfigDict


class Category(Enum):
    """Coarse test grouping used for reports and artifact directories."""

    SMOKE = "smoke"
    FUNCTIONAL = "functional"
    VISUAL = "visual"
    ACCESSIBILITY = "accessibility"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return CATEGORY_INFO[self]["name"]

    @property
    def priority(self) -> Optional[str]:
        return CATEGORY_INFO[self]["priority"]


CATEGORY_INFO: Dict[Category, Dict[str, Optional[str]]] = {
    Category.SMOKE: {
        "name": "Smoke tests",
        "description": "Basic availability checks",
        "priority": "P0",
    },
    Category.FUNCTIONAL: {
        "name": "Functional tests",
        "description": "Business logic checks",
        "priority": "P0",
    },
    Category.VISUAL: {
        "name": "Visual tests",
        "description": "Responsive layout and rendering checks",
        "priority": "P1",
    },
    Category.ACCESSIBILITY: {
        "name": "Accessibility tests",
        "description": "WCAG conformance checks",
        "priority": "P2",
    },
    Category.OTHER: {
        "name": "Other",
        "description": "Uncategorized tests",
        "priority": None,
    },
}


class ArtifactType(Enum):
    """Kinds of diagnostic artifacts."""

    FAILURE = "failure"
    STEP = "step"
    COMPARISON = "comparison"
    FULL_PAGE = "full-page"
    ELEMENT = "element"
    VIDEO = "video"
    TRACE = "trace"

    @property
    def extension(self) -> str:
        return ARTIFACT_EXTENSIONS.get(self, "png")


ARTIFACT_EXTENSIONS = {ArtifactType.VIDEO: "webm", ArtifactType.TRACE: "zip"}


class CaseMetadata(BaseModel):
    """Ambient metadata of a running test, as seen by the artifact namer."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., description="Test title, e.g. 'SMOKE-01: Page loads'")
    file_path: str = Field("", description="Path of the file defining the test")
    project_name: str = Field("unknown", description="Browser project name")
    viewport: Optional[Dict[str, int]] = Field(None, description="Viewport size")
    tags: List[str] = Field(default_factory=list, description="Test tags/markers")

    @validator("project_name")
    def validate_project_name(cls, v):
        return v.strip() if v and v.strip() else "unknown"

    @classmethod
    def from_pytest_item(
        cls,
        item,
        project_name: str,
        viewport: Optional[Dict[str, int]] = None,
    ) -> "CaseMetadata":
        """
        Build metadata from a collected pytest item.

        The title comes from the ``title`` marker, falling back to the test name.
        """
        marker = item.get_closest_marker("title")
        title = marker.args[0] if marker and marker.args else item.name
        tags = sorted({m.name for m in item.iter_markers() if m.name != "title"})
        return cls(
            title=title,
            file_path=Path(str(item.fspath)).as_posix(),
            project_name=project_name,
            viewport=viewport,
            tags=tags,
        )


class ArtifactIdentity(BaseModel):
    """Components of an artifact file name, recomputed per artifact."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    test_id: str = Field(..., description="Short test code such as SMOKE-01")
    category: Category = Field(..., description="Test category")
    browser_project: str = Field(..., description="Browser project name")
    viewport: str = Field(..., description="Viewport label such as 1920x1080")
    timestamp: str = Field(..., description="Filesystem-safe timestamp")
    slug: str = Field(..., description="Transliterated title slug")
