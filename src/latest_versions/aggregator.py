"""
Aggregation of versions into the latest release per major.minor line.
"""

from bisect import bisect_left
from collections.abc import Iterable, Iterator

from semver import Version

from .version_filter import is_eligible


class LatestVersionSet:
    """
    Highest version per (major, minor), ordered newest line first.

    Entries are kept strictly descending by (major, minor). Adding a version
    for a line that is already present only replaces the entry when the
    patch is strictly higher.
    """

    def __init__(self, versions: Iterable[Version] = ()):
        self._keys: list[tuple[int, int]] = []  # (-major, -minor), ascending
        self._versions: list[Version] = []
        for version in versions:
            self.add(version)

    def add(self, version: Version) -> bool:
        """
        Fold one version into the set.

        Returns:
            True if the set changed
        """
        key = (-version.major, -version.minor)
        index = bisect_left(self._keys, key)

        if index < len(self._keys) and self._keys[index] == key:
            if version.patch > self._versions[index].patch:
                self._versions[index] = version
                return True
            return False

        self._keys.insert(index, key)
        self._versions.insert(index, version)
        return True

    def as_list(self) -> list[Version]:
        """Copy of the entries in order."""
        return list(self._versions)

    def majors(self) -> list[int]:
        """Distinct major versions present, newest first."""
        seen: list[int] = []
        for version in self._versions:
            if not seen or seen[-1] != version.major:
                seen.append(version.major)
        return seen

    def __iter__(self) -> Iterator[Version]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return f"LatestVersionSet([{', '.join(str(v) for v in self._versions)}])"


def aggregate_latest_versions(
    versions: Iterable[Version | None], min_version: Version | None = None
) -> list[Version]:
    """
    Reduce versions to the highest patch of every major.minor line.

    Input may be unsorted and contain duplicates. Parse holes (None) are
    skipped. Inputs are expected to be pre-filtered; when ``min_version`` is
    given, anything that is a pre-release, major 0 or below it is dropped too.

    Returns:
        Versions sorted by (major, minor), newest first
    """
    latest = LatestVersionSet()
    for version in versions:
        if version is None:
            continue
        if min_version is not None and not is_eligible(version, min_version):
            continue
        latest.add(version)
    return latest.as_list()
