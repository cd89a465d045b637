"""
Latest release versions per major.minor line for GitHub repositories.
"""

from .aggregator import LatestVersionSet, aggregate_latest_versions
from .core import LatestVersionsResolver
from .data_models import ReleasePage, RepositoryResult, RepositoryTarget
from .pagination import ReleaseCollector
from .version_filter import parse_release_tag

__all__ = [
    "LatestVersionsResolver",
    "LatestVersionSet",
    "ReleaseCollector",
    "ReleasePage",
    "RepositoryResult",
    "RepositoryTarget",
    "aggregate_latest_versions",
    "parse_release_tag",
]
