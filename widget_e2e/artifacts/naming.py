"""
Structured naming for screenshots, videos and other test artifacts.

Produces relative paths of the form::

    {category}/{project}/{test_id}_{slug}[_{step}]_{viewport}_{type}_{timestamp}.{ext}

e.g. ``smoke/chromium/SMOKE-01_stranitsa-zagruzhaetsya_1920x1080_failure_2024-01-15_10-30-00.png``.

Naming never touches the filesystem; callers create directories and write files.
"""

import re
from datetime import datetime
from pathlib import PurePosixPath
from typing import Optional

from .models import ArtifactIdentity, ArtifactType, CaseMetadata, Category

MAX_SLUG_LENGTH = 50
TEST_ID_PLACEHOLDER = "TEST"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

TEST_ID_PATTERN = re.compile(r"^([A-Z]+-\d+)")
TITLE_DESCRIPTION_PATTERN = re.compile(r"^[A-Z]+-\d+:\s*(.+)$", re.DOTALL)

CYRILLIC_TO_LATIN = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "sch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}

CATEGORY_TAGS = (
    (Category.SMOKE, ("@smoke",)),
    (Category.FUNCTIONAL, ("@functional",)),
    (Category.VISUAL, ("@visual",)),
    (Category.ACCESSIBILITY, ("@accessibility", "@a11y")),
)

BROWSER_NAMES = {
    "chromium": "Chrome",
    "firefox": "Firefox",
    "webkit": "Safari",
    "mobile-chrome": "Chrome Mobile (Pixel 5)",
    "mobile-safari": "Safari Mobile (iPhone 12)",
    "critical-with-video": "Chrome (video)",
}

STATUS_NAMES = {
    "passed": "Passed",
    "failed": "Failed",
    "timedOut": "Timed out",
    "skipped": "Skipped",
    "interrupted": "Interrupted",
}


def transliterate(text: str) -> str:
    """Turn arbitrary (Cyrillic) text into a ``[a-z0-9-]`` file name fragment."""
    latin = "".join(CYRILLIC_TO_LATIN.get(char, char) for char in text.lower())
    latin = re.sub(r"[\s_]", "-", latin)
    latin = re.sub(r"[^a-z0-9-]", "", latin)
    latin = re.sub(r"-+", "-", latin)
    return latin.strip("-")


def extract_test_id(title: str) -> str:
    """Leading ``CATEGORY-NN`` code of a title, or an empty string."""
    match = TEST_ID_PATTERN.match(title)
    return match.group(1) if match else ""


def slugify_title(title: str) -> str:
    """Bounded, transliterated slug of the title text after its test ID."""
    match = TITLE_DESCRIPTION_PATTERN.match(title)
    description = match.group(1) if match else title
    slug = transliterate(description[:MAX_SLUG_LENGTH])
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def detect_category(metadata: CaseMetadata) -> Category:
    """Category from the test file's directory, then from tags in title or markers."""
    file_path = metadata.file_path.replace("\\", "/")
    for category in (
        Category.SMOKE,
        Category.FUNCTIONAL,
        Category.VISUAL,
        Category.ACCESSIBILITY,
    ):
        if f"/{category.value}/" in file_path:
            return category

    title = metadata.title.lower()
    tags = {tag.lower().lstrip("@") for tag in metadata.tags}
    for category, markers in CATEGORY_TAGS:
        if any(marker in title for marker in markers):
            return category
        if any(marker.lstrip("@") in tags for marker in markers):
            return category

    return Category.OTHER


def viewport_label(metadata: CaseMetadata) -> str:
    """``WIDTHxHEIGHT`` of the project viewport, else ``mobile``/``desktop``."""
    viewport = metadata.viewport
    if viewport and "width" in viewport and "height" in viewport:
        return f"{viewport['width']}x{viewport['height']}"
    if "mobile" in metadata.project_name:
        return "mobile"
    return "desktop"


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Second-resolution timestamp without colons."""
    now = now or datetime.utcnow()
    return now.strftime(TIMESTAMP_FORMAT)


def identity_for(metadata: CaseMetadata, now: Optional[datetime] = None) -> ArtifactIdentity:
    """Derive all naming components for one artifact."""
    return ArtifactIdentity(
        test_id=extract_test_id(metadata.title) or TEST_ID_PLACEHOLDER,
        category=detect_category(metadata),
        browser_project=metadata.project_name,
        viewport=viewport_label(metadata),
        timestamp=format_timestamp(now),
        slug=slugify_title(metadata.title),
    )


def name_for(
    metadata: CaseMetadata,
    artifact_type: ArtifactType = ArtifactType.FAILURE,
    step_label: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Relative path for an artifact of a test.

    Args:
        metadata: Metadata of the running test
        artifact_type: Kind of artifact
        step_label: Optional step description appended after the slug
        now: Override for the wall clock

    Returns:
        Relative POSIX path, ``category/project/file``
    """
    identity = identity_for(metadata, now)

    parts = [identity.test_id]
    if identity.slug:
        parts.append(identity.slug)
    if step_label:
        step_slug = transliterate(step_label)[:MAX_SLUG_LENGTH].rstrip("-")
        if step_slug:
            parts.append(step_slug)
    parts.extend([identity.viewport, artifact_type.value, identity.timestamp])

    file_name = f"{'_'.join(parts)}.{artifact_type.extension}"
    return str(
        PurePosixPath(identity.category.value, identity.browser_project, file_name)
    )


def video_name_for(metadata: CaseMetadata, now: Optional[datetime] = None) -> str:
    """Relative path for a test's video recording."""
    return name_for(metadata, ArtifactType.VIDEO, now=now)


def format_test_name_for_report(metadata: CaseMetadata) -> str:
    """Title prefixed with the category display name, e.g. ``[Smoke tests] SMOKE-01: ...``."""
    category = detect_category(metadata)
    if category is Category.OTHER:
        return metadata.title
    return f"[{category.display_name}] {metadata.title}"


def browser_display_name(project_name: str) -> str:
    return BROWSER_NAMES.get(project_name, project_name)


def status_display_name(status: str) -> str:
    return STATUS_NAMES.get(status, status)
