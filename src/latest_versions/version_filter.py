"""
Parsing and eligibility filtering for release tags.
"""

from semver import Version

from ..shared_utilities import get_logger
from .errors import InvalidVersionError

logger = get_logger(__name__)


def _strip_prefix(text: str) -> str:
    """Drop exactly one leading 'v' if present."""
    return text[1:] if text.startswith("v") else text


def parse_version(text: str) -> Version | None:
    """
    Parse a tag as a semantic version without applying any eligibility policy.

    Returns None when the tag is not MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD].
    """
    try:
        return Version.parse(_strip_prefix(text.strip()))
    except (ValueError, TypeError):
        return None


def parse_minimum_version(text: str, line_number: int | None = None) -> Version:
    """
    Parse a configured minimum version.

    Raises:
        InvalidVersionError: If the text is not a semantic version
    """
    version = parse_version(text) if text else None
    if version is None:
        raise InvalidVersionError(
            f"invalid minimum version '{text}'", line_number=line_number
        )
    return version


def is_eligible(version: Version, min_version: Version | None = None) -> bool:
    """Stable, at least 1.0.0, and not below the floor."""
    if version.major == 0 or version.prerelease:
        return False
    return min_version is None or version >= min_version


def parse_release_tag(tag: str, min_version: Version) -> Version | None:
    """
    Turn a raw release tag into a version, or None when it does not qualify.

    Tags whose first character sorts below "1" never qualify, which rules out
    the 0.x.y development line. A single leading "v" is ignored. Unparsable
    tags, pre-releases and versions below ``min_version`` are rejected.
    Surrounding whitespace is ignored, as in parse_version.
    """
    tag = tag.strip()
    if not tag or tag[0] < "1":
        return None

    version = parse_version(tag)
    if version is None:
        logger.debug(f"Skipping non-semver tag: {tag}")
        return None

    if not is_eligible(version, min_version):
        return None

    return version


def filter_release_tags(tags: list[str], min_version: Version) -> list[Version]:
    """Parse a page of tags, keeping only qualifying versions in page order."""
    versions = []
    for tag in tags:
        version = parse_release_tag(tag, min_version)
        if version is not None:
            versions.append(version)
    return versions
