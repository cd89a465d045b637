"""
GitHub API client for paging through repository releases
"""

import os

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from ..shared_utilities import (
    RateLimitExceeded,
    RateLimitManager,
    get_logger,
    global_rate_limit_manager,
)
from .data_models import ReleasePage
from .errors import ReleaseSourceError

DEFAULT_PER_PAGE = 10


class GitHubReleaseSource:
    """Paged release listing backed by the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        per_page: int = DEFAULT_PER_PAGE,
        rate_limit_manager: RateLimitManager | None = None,
    ):
        """
        Initialize GitHub client with optional token.

        Args:
            token: GitHub token, falls back to GITHUB_TOKEN
            per_page: Releases requested per page
            rate_limit_manager: Quota tracker shared across sources
        """
        if per_page < 1:
            raise ValueError("per_page must be at least 1")

        self.token = token or os.environ.get("GITHUB_TOKEN")
        self.per_page = per_page
        if self.token:
            self.github = Github(auth=Auth.Token(self.token), per_page=per_page)
        else:
            # Use unauthenticated client (rate limited)
            self.github = Github(per_page=per_page)

        self.rate_limit_manager = rate_limit_manager or global_rate_limit_manager
        self.logger = get_logger(__name__)
        self._repos: dict[str, Repository] = {}

    def _get_repo(self, owner: str, name: str) -> Repository:
        """Get a lazily-loaded repository handle."""
        full_name = f"{owner}/{name}"
        if full_name not in self._repos:
            self._repos[full_name] = self.github.get_repo(full_name, lazy=True)
        return self._repos[full_name]

    def list_releases(self, owner: str, name: str, page: int) -> ReleasePage:
        """
        Fetch one page of release tags, newest first.

        Args:
            owner: Repository owner
            name: Repository name
            page: Zero-based page index

        Returns:
            ReleasePage whose next_page is None once a short page is returned

        Raises:
            ReleaseSourceError: If the request fails or the quota is exhausted
        """
        try:
            self.rate_limit_manager.ensure_quota()
            self.rate_limit_manager.wait_if_needed(tool_name="latest-versions")

            releases = self._get_repo(owner, name).get_releases().get_page(page)
            self.rate_limit_manager.record_status(self.github)
        except RateLimitExceeded as e:
            raise ReleaseSourceError(str(e)) from e
        except GithubException as e:
            raise ReleaseSourceError(
                f"GitHub API error: {self._error_message(e)}"
            ) from e
        except requests.RequestException as e:
            raise ReleaseSourceError(f"Request to GitHub failed: {e}") from e

        tags = [release.tag_name for release in releases if not release.draft]
        next_page = page + 1 if len(releases) >= self.per_page else None

        self.logger.debug(
            f"Fetched {len(tags)} releases for {owner}/{name} (page {page})"
        )
        return ReleasePage(tags=tags, next_page=next_page)

    @staticmethod
    def _error_message(e: GithubException) -> str:
        """Extract the API's message from an exception payload."""
        if isinstance(e.data, dict):
            return e.data.get("message", str(e))
        return str(e)
