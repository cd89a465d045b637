"""
Core latest-version resolution across configured repositories.
"""

from collections.abc import Callable
from pathlib import Path

from ..shared_utilities import get_logger
from ..shared_utilities.telemetry import trace_function, trace_operation
from .aggregator import aggregate_latest_versions
from .config import (
    RepositoryRow,
    ResolverSettings,
    read_repository_rows,
    split_repository_row,
)
from .data_models import RepositoryResult, RepositoryTarget
from .errors import ReleaseFetchError, RepositoryConfigError
from .github_client import GitHubReleaseSource
from .pagination import ErrorCallback, ReleaseCollector, ReleaseSource
from .version_filter import parse_minimum_version


class LatestVersionsResolver:
    """
    Resolves the latest release of every major.minor line per repository.

    Repositories are processed one at a time in input order. A bad row or a
    repository whose releases cannot be fetched produces an error result for
    that row only.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        source: ReleaseSource | None = None,
        on_error: ErrorCallback | None = None,
    ):
        """Initialize resolver.

        Args:
            settings: Fetch settings, read from the environment if None
            source: Paged release source, GitHub if None
            on_error: Receives every failed page attempt
        """
        self.logger = get_logger(__name__)
        self.settings = settings or ResolverSettings.from_env()
        self.source = source or GitHubReleaseSource(
            token=self.settings.token, per_page=self.settings.per_page
        )
        self.collector = ReleaseCollector(
            self.source, max_attempts=self.settings.max_attempts, on_error=on_error
        )

    def resolve_target(
        self, target: RepositoryTarget, min_version_text: str | None = None
    ) -> RepositoryResult:
        """Fetch, filter and aggregate releases for one repository."""
        result = RepositoryResult(
            owner=target.owner,
            name=target.name,
            min_version=min_version_text or str(target.min_version),
        )

        with trace_operation(
            "resolve_repository",
            {"repo": target.full_name, "min_version": str(target.min_version)},
        ):
            try:
                collection = self.collector.collect(target)
            except ReleaseFetchError as e:
                self.logger.error(f"Giving up on {target.full_name}: {e}")
                result.error = str(e)
                result.versions = aggregate_latest_versions(e.collected)
                result.pages_fetched = e.pages_fetched
                return result

        result.versions = aggregate_latest_versions(collection.versions)
        result.pages_fetched = collection.pages_fetched
        result.stopped_early = collection.stopped_early

        self.logger.info(
            f"{target.full_name}: {len(result.versions)} release lines "
            f"from {collection.pages_fetched} page(s)"
        )
        return result

    def resolve_row(self, row: RepositoryRow) -> RepositoryResult:
        """Resolve one repository list row, turning config problems into a result."""
        try:
            owner, name, min_text = split_repository_row(row)
        except RepositoryConfigError as e:
            self.logger.error(str(e))
            return RepositoryResult(
                owner="",
                name=row.text,
                min_version="",
                error=str(e),
                line_number=row.line_number,
            )

        try:
            min_version = parse_minimum_version(min_text, line_number=row.line_number)
        except RepositoryConfigError as e:
            self.logger.error(f"{owner}/{name}: {e}")
            return RepositoryResult(
                owner=owner,
                name=name,
                min_version=min_text,
                error=str(e),
                line_number=row.line_number,
            )

        target = RepositoryTarget(owner=owner, name=name, min_version=min_version)
        result = self.resolve_target(target, min_version_text=min_text)
        result.line_number = row.line_number
        return result

    @trace_function("resolve_repository_list")
    def resolve_file(
        self,
        path: str | Path,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> list[RepositoryResult]:
        """
        Resolve every repository in a repository list file.

        Raises:
            RepositoryConfigError: If the file itself cannot be read
        """
        rows = read_repository_rows(path)
        results = []

        for i, row in enumerate(rows):
            if progress_callback:
                progress_callback(i, len(rows), f"Resolving {row.text}")
            results.append(self.resolve_row(row))

        if progress_callback:
            progress_callback(len(rows), len(rows), "Done")

        failed = sum(1 for result in results if not result.succeeded)
        if failed:
            self.logger.warning(f"{failed} of {len(results)} repositories failed")
        return results
