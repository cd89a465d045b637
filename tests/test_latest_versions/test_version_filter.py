"""
Tests for release tag parsing and filtering
"""

import pytest
from semver import Version

from src.latest_versions.errors import InvalidVersionError, RepositoryConfigError
from src.latest_versions.version_filter import (
    filter_release_tags,
    is_eligible,
    parse_minimum_version,
    parse_release_tag,
    parse_version,
)

FLOOR = Version(1, 0, 0)


class TestParseVersion:
    """Test parse_version without eligibility rules."""

    def test_plain_version(self):
        assert parse_version("1.2.3") == Version(1, 2, 3)

    def test_strips_single_v_prefix(self):
        assert parse_version("v1.2.3") == Version(1, 2, 3)

    def test_only_one_prefix_character_is_stripped(self):
        assert parse_version("vv1.2.3") is None

    def test_keeps_prerelease(self):
        version = parse_version("0.9.0-rc.1")
        assert version.major == 0
        assert version.prerelease == "rc.1"

    @pytest.mark.parametrize("tag", ["vX.Y.Z", "1.2", "1.2.3.4", "latest", ""])
    def test_malformed_tags(self, tag):
        assert parse_version(tag) is None


class TestParseReleaseTag:
    """Test the rejection policy applied to raw release tags."""

    def test_accepts_plain_and_prefixed_tags(self):
        assert parse_release_tag("1.4.2", FLOOR) == Version(1, 4, 2)
        assert parse_release_tag("v2.0.0", FLOOR) == Version(2, 0, 0)

    def test_rejects_zero_major_by_first_character(self):
        assert parse_release_tag("0.9.0", Version(0, 5, 0)) is None

    def test_rejects_prefixed_zero_major(self):
        """A v prefix must not let the 0.x line through."""
        assert parse_release_tag("v0.9.0", Version(0, 5, 0)) is None

    @pytest.mark.parametrize("tag", ["", "-1.0.0", ".1.0.0", "+1.0.0"])
    def test_rejects_leading_characters_below_one(self, tag):
        assert parse_release_tag(tag, FLOOR) is None

    def test_rejects_unparsable_tag(self):
        assert parse_release_tag("vX.Y.Z", FLOOR) is None
        assert parse_release_tag("release-1.0.0", FLOOR) is None

    def test_rejects_prerelease(self):
        assert parse_release_tag("3.0.0-beta", FLOOR) is None
        assert parse_release_tag("v3.0.0-rc.1", FLOOR) is None

    def test_rejects_below_minimum(self):
        assert parse_release_tag("1.9.9", Version(2, 0, 0)) is None

    def test_minimum_is_inclusive(self):
        assert parse_release_tag("2.0.0", Version(2, 0, 0)) == Version(2, 0, 0)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_release_tag(" 1.2.0\n", FLOOR) == Version(1, 2, 0)
        assert parse_release_tag(" 0.9.0", Version(0, 5, 0)) is None
        assert parse_release_tag("   ", FLOOR) is None

    def test_build_metadata_is_stable(self):
        version = parse_release_tag("1.2.3+build.5", FLOOR)
        assert version == Version(1, 2, 3)
        assert version.build == "build.5"


class TestFilterReleaseTags:
    """Test filtering of a whole page."""

    def test_keeps_page_order_and_drops_rejects(self):
        tags = ["v2.1.0", "vX.Y.Z", "2.1.0-rc.1", "2.0.1", "0.9.0", "v1.0.0"]
        assert filter_release_tags(tags, FLOOR) == [
            Version(2, 1, 0),
            Version(2, 0, 1),
            Version(1, 0, 0),
        ]

    def test_empty_page(self):
        assert filter_release_tags([], FLOOR) == []


class TestIsEligible:
    """Test is_eligible."""

    def test_stable_above_floor(self):
        assert is_eligible(Version(1, 2, 3), FLOOR)

    def test_without_floor(self):
        assert is_eligible(Version(1, 0, 0))
        assert not is_eligible(Version(0, 1, 0))

    def test_prerelease(self):
        assert not is_eligible(Version(2, 0, 0, prerelease="alpha"), FLOOR)


class TestParseMinimumVersion:
    """Test parse_minimum_version."""

    def test_valid(self):
        assert parse_minimum_version("1.0.0") == Version(1, 0, 0)
        assert parse_minimum_version("v0.5.0") == Version(0, 5, 0)

    def test_invalid_raises_with_line_number(self):
        with pytest.raises(
            InvalidVersionError, match="line 4: invalid minimum version"
        ):
            parse_minimum_version("1.x", line_number=4)

    def test_invalid_is_config_error(self):
        with pytest.raises(RepositoryConfigError):
            parse_minimum_version("")
