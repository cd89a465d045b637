"""
Exceptions raised while resolving latest release versions.
"""


class LatestVersionsError(Exception):
    """Base exception for latest-versions operations."""

    pass


class RepositoryConfigError(LatestVersionsError):
    """A repository list, one of its rows, or a setting is malformed."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class InvalidVersionError(RepositoryConfigError):
    """A configured minimum version is not a semantic version."""

    pass


class ReleaseSourceError(LatestVersionsError):
    """A single page request to the release source failed."""

    pass


class ReleaseFetchError(LatestVersionsError):
    """A page kept failing after every allowed attempt."""

    def __init__(
        self,
        message: str,
        page: int,
        attempts: int,
        collected=None,
        pages_fetched: int = 0,
    ):
        super().__init__(message)
        self.page = page
        self.attempts = attempts
        self.collected = list(collected or [])
        self.pages_fetched = pages_fetched
