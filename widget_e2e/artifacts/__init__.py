"""Artifact naming for screenshots and videos."""

from .models import ArtifactIdentity, ArtifactType, CaseMetadata, Category
from .naming import (
    browser_display_name,
    detect_category,
    extract_test_id,
    format_test_name_for_report,
    format_timestamp,
    identity_for,
    name_for,
    slugify_title,
    status_display_name,
    transliterate,
    video_name_for,
    viewport_label,
)

__all__ = [
    "ArtifactIdentity",
    "ArtifactType",
    "CaseMetadata",
    "Category",
    "browser_display_name",
    "detect_category",
    "extract_test_id",
    "format_test_name_for_report",
    "format_timestamp",
    "identity_for",
    "name_for",
    "slugify_title",
    "status_display_name",
    "transliterate",
    "video_name_for",
    "viewport_label",
]
