"""
Main CLI entry point for latest release version resolution.
"""

import sys

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger
from .config import ResolverSettings
from .core import LatestVersionsResolver
from .errors import LatestVersionsError
from .output_formatter import OUTPUT_FORMATS, LatestVersionsFormatter

# Load environment variables from .env file
load_dotenv()


class ProgressIndicator:
    """Simple progress indicator for CLI operations."""

    def __init__(self, quiet: bool = False):
        """Initialize progress indicator.

        Args:
            quiet: If True, suppress progress output
        """
        self.quiet = quiet

    def update(self, current: int, total: int, message: str) -> None:
        """Update progress display."""
        if self.quiet:
            return

        if total > 0:
            click.echo(f"[{current}/{total}] {message}", err=True)
        else:
            click.echo(f"[ - ] {message}", err=True)


@click.command()
@click.argument("repo_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    help="Output format",
    show_default=True,
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    help="Output file (default: stdout)",
)
@click.option(
    "--per-page",
    type=click.IntRange(min=1, max=100),
    help="Releases requested per page (default: LATEST_VERSIONS_PER_PAGE or 10)",
)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    help="Attempts per page before a repository is reported as failed",
)
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    help="GitHub token (or set GITHUB_TOKEN env var)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress progress output and informational logs",
)
def main(
    repo_file: str,
    output_format: str,
    output_file: str | None,
    per_page: int | None,
    max_attempts: int | None,
    token: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """
    Show the latest release of every major.minor line for GitHub repositories.

    REPO_FILE starts with a header line, followed by one
    "owner/repository,minimum-version" entry per line.

    Examples:

        # Print one line per repository
        latest-versions repos.txt

        # Group releases by major version
        latest-versions repos.txt --format table

        # Save JSON output to file
        latest-versions repos.txt --format json -o latest.json
    """
    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging()
    logger = get_logger(__name__)

    try:
        settings = ResolverSettings.from_env()
        if token:
            settings.token = token
        if per_page is not None:
            settings.per_page = per_page
        if max_attempts is not None:
            settings.max_attempts = max_attempts

        resolver = LatestVersionsResolver(settings=settings)
        formatter = LatestVersionsFormatter()
        progress = ProgressIndicator(quiet=quiet)

        results = resolver.resolve_file(repo_file, progress_callback=progress.update)
    except LatestVersionsError as e:
        logger.error(f"Error: {e}")
        raise click.ClickException(str(e)) from e

    if output_file:
        formatter.save_to_file(results, output_file, output_format)
        click.echo(f"Output saved to {output_file}", err=True)
    else:
        click.echo(formatter.format(results, output_format))

    if any(not result.succeeded for result in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
