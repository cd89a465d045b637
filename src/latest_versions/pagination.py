"""
Sequential consumption of a paged release listing with early exit.

Pages are assumed to arrive newest first. Once the last raw tag of a page is
older than the repository's minimum version, later pages cannot hold
qualifying releases and fetching stops.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from semver import Version

from ..shared_utilities import get_logger
from .data_models import CollectionResult, ReleasePage, RepositoryTarget
from .errors import ReleaseFetchError, ReleaseSourceError
from .version_filter import filter_release_tags, parse_version

DEFAULT_MAX_ATTEMPTS = 3

ErrorCallback = Callable[[RepositoryTarget, int, int, Exception], None]


class ReleaseSource(Protocol):
    """Paged listing of release tags for a repository."""

    def list_releases(self, owner: str, name: str, page: int) -> ReleasePage:
        """Return one page; raise ReleaseSourceError on failure."""
        ...


class PaginationState(Enum):
    """States of the page-consumption loop."""

    FETCHING = "fetching"
    EVALUATING = "evaluating"
    STOPPED = "stopped"


def page_ends_below_minimum(tags: list[str], min_version: Version) -> bool:
    """
    True when the page's last raw tag parses to a version below the floor.

    The decision uses the unfiltered tail so a page emptied by filtering
    does not end pagination. An empty page or an unparsable tail gives no
    evidence either way.
    """
    if not tags:
        return False

    trailing = parse_version(tags[-1])
    return trailing is not None and trailing < min_version


class ReleaseCollector:
    """Drives the page loop for one repository at a time."""

    def __init__(
        self,
        source: ReleaseSource,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        on_error: ErrorCallback | None = None,
        first_page: int = 0,
    ):
        """
        Initialize the collector.

        Args:
            source: Paged release source
            max_attempts: Attempts per page before giving up on the repository
            on_error: Called with (target, page, attempt, error) on each failure
            first_page: Index of the first page in the source's numbering
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.source = source
        self.max_attempts = max_attempts
        self.on_error = on_error
        self.first_page = first_page
        self.logger = get_logger(__name__)

    def collect(self, target: RepositoryTarget) -> CollectionResult:
        """
        Fetch pages until exhaustion or early exit.

        Raises:
            ReleaseFetchError: If one page fails ``max_attempts`` times in a row
        """
        collected: list[Version] = []
        page_index: int | None = self.first_page
        pages_fetched = 0
        attempt = 0
        stopped_early = False
        page: ReleasePage | None = None
        state = PaginationState.FETCHING

        while state is not PaginationState.STOPPED:
            if state is PaginationState.FETCHING:
                attempt += 1
                try:
                    page = self.source.list_releases(
                        target.owner, target.name, page_index
                    )
                except ReleaseSourceError as e:
                    self._report_error(target, page_index, attempt, e)
                    if attempt >= self.max_attempts:
                        raise ReleaseFetchError(
                            f"page {page_index} of {target.full_name} failed "
                            f"after {attempt} attempts: {e}",
                            page=page_index,
                            attempts=attempt,
                            collected=collected,
                            pages_fetched=pages_fetched,
                        ) from e
                    continue

                attempt = 0
                pages_fetched += 1
                state = PaginationState.EVALUATING

            else:
                versions = filter_release_tags(page.tags, target.min_version)
                collected.extend(versions)
                self.logger.debug(
                    f"{target.full_name} page {page_index}: "
                    f"{len(versions)}/{len(page.tags)} tags qualify"
                )

                if page_ends_below_minimum(page.tags, target.min_version):
                    self.logger.debug(
                        f"{target.full_name}: '{page.tags[-1]}' is below "
                        f"{target.min_version}, stopping after page {page_index}"
                    )
                    stopped_early = True
                    state = PaginationState.STOPPED
                elif page.next_page is None:
                    state = PaginationState.STOPPED
                else:
                    page_index = page.next_page
                    state = PaginationState.FETCHING

        return CollectionResult(
            versions=collected,
            pages_fetched=pages_fetched,
            stopped_early=stopped_early,
        )

    def _report_error(
        self, target: RepositoryTarget, page: int, attempt: int, error: Exception
    ) -> None:
        """Log a failed attempt and forward it to the caller's error channel."""
        self.logger.warning(
            f"Failed to fetch page {page} of {target.full_name} "
            f"(attempt {attempt}/{self.max_attempts}): {error}"
        )
        if self.on_error:
            self.on_error(target, page, attempt, error)
