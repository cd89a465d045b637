"""
Configuration: runtime settings and the repository list file.

The repository list is a text file whose first line is a header. Every
following line names one repository and its minimum version::

    repository,min_version
    kubernetes/kubernetes,1.20.0
    prometheus/prometheus,v2.30.0

Blank lines and lines starting with ``#`` are ignored.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from ..shared_utilities import get_logger
from .data_models import RepositoryTarget
from .errors import RepositoryConfigError
from .github_client import DEFAULT_PER_PAGE
from .pagination import DEFAULT_MAX_ATTEMPTS
from .version_filter import parse_minimum_version

logger = get_logger(__name__)


def _int_from_env(name: str, default: int) -> int:
    """Read a positive integer setting from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise RepositoryConfigError(f"{name} must be an integer, got '{raw}'") from e
    if value < 1:
        raise RepositoryConfigError(f"{name} must be at least 1, got {value}")
    return value


@dataclass
class ResolverSettings:
    """Settings for fetching releases."""

    token: str | None = None
    per_page: int = DEFAULT_PER_PAGE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    @classmethod
    def from_env(cls) -> "ResolverSettings":
        """Build settings from GITHUB_TOKEN and LATEST_VERSIONS_* variables."""
        return cls(
            token=os.getenv("GITHUB_TOKEN") or None,
            per_page=_int_from_env("LATEST_VERSIONS_PER_PAGE", DEFAULT_PER_PAGE),
            max_attempts=_int_from_env(
                "LATEST_VERSIONS_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS
            ),
        )


@dataclass(frozen=True)
class RepositoryRow:
    """One data line of the repository list."""

    line_number: int
    text: str


def read_repository_rows(path: str | Path) -> list[RepositoryRow]:
    """
    Read data lines from a repository list, skipping the header line.

    Raises:
        RepositoryConfigError: If the file cannot be read
    """
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise RepositoryConfigError(
            f"Cannot read repository list {path}: {e}"
        ) from e

    rows = []
    for line_number, line in enumerate(lines[1:], start=2):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        rows.append(RepositoryRow(line_number=line_number, text=text))

    logger.info(f"Loaded {len(rows)} repositories from {path}")
    return rows


def split_repository_row(row: RepositoryRow) -> tuple[str, str, str]:
    """
    Split a row into owner, name and minimum version text.

    Raises:
        RepositoryConfigError: If the row is not owner/name,minVersion
    """
    repo_part, _, min_text = row.text.partition(",")
    owner, _, name = repo_part.strip().partition("/")
    owner, name, min_text = owner.strip(), name.strip(), min_text.strip()

    if not owner or not name or "/" in name or not min_text:
        raise RepositoryConfigError(
            f"expected 'owner/name,minVersion', got '{row.text}'",
            line_number=row.line_number,
        )
    return owner, name, min_text


def parse_repository_row(row: RepositoryRow) -> RepositoryTarget:
    """
    Build a RepositoryTarget from one row.

    Raises:
        RepositoryConfigError: If the row or its minimum version is malformed
    """
    owner, name, min_text = split_repository_row(row)
    min_version = parse_minimum_version(min_text, line_number=row.line_number)
    return RepositoryTarget(owner=owner, name=name, min_version=min_version)
