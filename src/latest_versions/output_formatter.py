"""
Output formatting for latest-version results.
"""

import csv
import json
from io import StringIO
from pathlib import Path
from typing import Any

from .aggregator import LatestVersionSet
from .data_models import RepositoryResult

OUTPUT_FORMATS = ["text", "table", "json", "csv"]


class LatestVersionsFormatter:
    """Renders per-repository results for the console or a file."""

    def format(self, results: list[RepositoryResult], output_format: str) -> str:
        """Dispatch to the formatter for ``output_format``."""
        if output_format == "text":
            return self.format_text_output(results)
        elif output_format == "table":
            return self.format_table_output(results)
        elif output_format == "json":
            return self.format_json_output(results)
        elif output_format == "csv":
            return self.format_csv_output(results)
        raise ValueError(f"Unsupported format: {output_format}")

    def format_text_output(self, results: list[RepositoryResult]) -> str:
        """One line per repository."""
        lines = []
        for result in results:
            if result.error:
                lines.append(
                    f"latest versions of {result.full_name}: error: {result.error}"
                )
            else:
                versions = " ".join(str(v) for v in result.versions)
                lines.append(f"latest versions of {result.full_name}: [{versions}]")
        return "\n".join(lines)

    def format_table_output(self, results: list[RepositoryResult]) -> str:
        """Format results as sections grouped by major version."""
        lines = [
            f"Latest Release Versions ({len(results)} repositories)",
            "=" * 60,
            "",
        ]

        for result in results:
            lines.append(f"{result.full_name} (minimum {result.min_version or '?'})")
            lines.append("-" * 40)

            if result.error:
                lines.append(f"  Error: {result.error}")
            if not result.versions and not result.error:
                lines.append("  No qualifying releases")

            latest = LatestVersionSet(result.versions)
            for major in latest.majors():
                lines.append(f"  v{major}.x")
                for version in latest:
                    if version.major == major:
                        lines.append(
                            f"    {version.major}.{version.minor}: {version}"
                        )

            if result.stopped_early:
                lines.append(
                    f"  (stopped after {result.pages_fetched} page(s): "
                    "older releases are below the minimum)"
                )
            lines.append("")

        return "\n".join(lines)

    def format_json_output(self, results: list[RepositoryResult]) -> str:
        """Format results as JSON."""
        data = {
            "repositories": [self._result_to_dict(result) for result in results],
            "failed": sum(1 for result in results if not result.succeeded),
        }
        return json.dumps(data, indent=2)

    def format_csv_output(self, results: list[RepositoryResult]) -> str:
        """Format results as CSV, one row per release line."""
        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(
            ["repository", "min_version", "major", "minor", "latest_version", "error"]
        )

        for result in results:
            if not result.versions:
                writer.writerow(
                    [
                        result.full_name,
                        result.min_version,
                        "",
                        "",
                        "",
                        result.error or "",
                    ]
                )
                continue
            for version in result.versions:
                writer.writerow(
                    [
                        result.full_name,
                        result.min_version,
                        version.major,
                        version.minor,
                        str(version),
                        result.error or "",
                    ]
                )

        return output.getvalue()

    def save_to_file(
        self,
        results: list[RepositoryResult],
        output_file: str | Path,
        output_format: str,
    ) -> None:
        """Write formatted results to a file."""
        content = self.format(results, output_format)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(content)
            if not content.endswith("\n"):
                f.write("\n")

    def _result_to_dict(self, result: RepositoryResult) -> dict[str, Any]:
        """Convert a result to a JSON-serializable dict."""
        return {
            "repository": result.full_name,
            "min_version": result.min_version,
            "versions": [str(v) for v in result.versions],
            "pages_fetched": result.pages_fetched,
            "stopped_early": result.stopped_early,
            "error": result.error,
            "line_number": result.line_number,
        }
