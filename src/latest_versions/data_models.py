"""
Data models for latest release version resolution.
"""

from dataclasses import dataclass, field

from semver import Version


@dataclass(frozen=True)
class RepositoryTarget:
    """One configured repository and its inclusive version floor."""

    owner: str
    name: str
    min_version: Version

    @property
    def full_name(self) -> str:
        """Repository name in owner/name format."""
        return f"{self.owner}/{self.name}"


@dataclass
class ReleasePage:
    """One page of release tags, newest first."""

    tags: list[str]
    next_page: int | None = None  # None when the listing is exhausted


@dataclass
class CollectionResult:
    """Versions gathered from the paged source for one repository."""

    versions: list[Version]
    pages_fetched: int = 0
    stopped_early: bool = False


@dataclass
class RepositoryResult:
    """Outcome for one row of the repository list."""

    owner: str
    name: str
    min_version: str  # As written in the repository list
    versions: list[Version] = field(default_factory=list)
    error: str | None = None
    pages_fetched: int = 0
    stopped_early: bool = False
    line_number: int | None = None

    @property
    def full_name(self) -> str:
        """Repository name in owner/name format, or the raw row if unparsed."""
        if not self.owner:
            return self.name
        return f"{self.owner}/{self.name}"

    @property
    def succeeded(self) -> bool:
        """True when no error was recorded for this row."""
        return self.error is None
