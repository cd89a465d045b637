"""
Pytest configuration and shared fixtures.
"""

import pytest
from semver import Version

from src.latest_versions.data_models import ReleasePage, RepositoryTarget
from src.latest_versions.errors import ReleaseSourceError


class FakeReleaseSource:
    """In-memory paged release source.

    ``pages`` maps "owner/name" to a list of pages, each a list of raw tags.
    ``failures`` maps ("owner/name", page) to how many times that request
    fails before it succeeds.
    """

    def __init__(self, pages, failures=None):
        self.pages = pages
        self.failures = dict(failures or {})
        self.calls = []

    def list_releases(self, owner, name, page):
        full_name = f"{owner}/{name}"
        self.calls.append((full_name, page))

        if self.failures.get((full_name, page), 0) > 0:
            self.failures[(full_name, page)] -= 1
            raise ReleaseSourceError(f"boom on page {page}")

        repo_pages = self.pages.get(full_name, [[]])
        next_page = page + 1 if page + 1 < len(repo_pages) else None
        return ReleasePage(tags=list(repo_pages[page]), next_page=next_page)

    def pages_requested(self, full_name):
        return [page for name, page in self.calls if name == full_name]


@pytest.fixture
def make_source():
    """Factory for FakeReleaseSource instances."""
    return FakeReleaseSource


@pytest.fixture
def widget_target():
    """Repository target with a 1.0.0 floor."""
    return RepositoryTarget(owner="acme", name="widget", min_version=Version(1, 0, 0))


@pytest.fixture
def repo_list_file(tmp_path):
    """Write a repository list file and return its path."""

    def _write(*rows, header="repository,min_version"):
        path = tmp_path / "repos.txt"
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path

    return _write
