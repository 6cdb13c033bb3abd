"""
Export of analysis results to JSON and CSV.

The ``prepare_*`` helpers flatten resource payloads into export-friendly
rows; ``to_json``/``to_csv`` render them and ``export_to_file`` writes them
next to a date-stamped filename.
"""

import csv
import io
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from ghanalyzer.types.records import (
    ContributorRecord,
    LanguageMap,
    RepositoryRecord,
    WeeklyActivityRecord,
)

ANALYZER_VERSION = "1.0.0"

_REPOSITORY_FIELDS = [
    "name",
    "full_name",
    "description",
    "created_at",
    "updated_at",
    "pushed_at",
    "size",
    "language",
    "languages_url",
    "stargazers_count",
    "watchers_count",
    "forks_count",
    "open_issues_count",
    "default_branch",
    "topics",
    "archived",
    "disabled",
    "has_wiki",
    "has_pages",
    "has_issues",
    "has_projects",
]

_CONTRIBUTOR_FIELDS = [
    "login",
    "id",
    "type",
    "contributions",
    "avatar_url",
    "html_url",
    "site_admin",
]


def to_json(data: Any) -> str:
    """Render data as indented JSON."""
    return json.dumps(data, indent=2, default=str)


def _csv_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def to_csv(data: list[dict[str, Any]] | dict[str, Any]) -> str:
    """
    Render data as CSV.

    A list of dicts becomes a header row (keys of the first row) plus one row
    per item. A single dict becomes ``Property,Value`` rows, with nested
    values JSON-encoded. An empty list renders as an empty string.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    if isinstance(data, list):
        if not data:
            return ""
        headers = list(data[0].keys())
        writer.writerow(headers)
        for row in data:
            writer.writerow([_csv_cell(row.get(header)) for header in headers])
    else:
        writer.writerow(["Property", "Value"])
        for key, value in data.items():
            writer.writerow([key, _csv_cell(value)])

    return buffer.getvalue()


def export_to_file(
    data: Any,
    filename: str = "github_analysis",
    fmt: str = "json",
    directory: str | Path = ".",
    today: date | None = None,
) -> Path:
    """
    Write data to ``<directory>/<filename>_<YYYY-MM-DD>.<fmt>``.

    Args:
        data: Export payload
        filename: File name prefix
        fmt: "json" or "csv"
        directory: Target directory (created if missing)
        today: Date stamp (default: today)

    Returns:
        Path of the written file

    Raises:
        ValueError: If fmt is not supported
    """
    if fmt == "json":
        content = to_json(data)
    elif fmt == "csv":
        content = to_csv(data)
    else:
        raise ValueError(f"Unsupported export format: {fmt!r}")

    stamp = (today or date.today()).isoformat()
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"{filename}_{stamp}.{fmt}"
    path.write_text(content, encoding="utf-8")
    return path


def prepare_repo_data_for_export(
    repository: RepositoryRecord, **additional: Any
) -> dict[str, Any]:
    """Select the repository fields worth exporting and add analysis metadata."""
    export: dict[str, Any] = {
        "repository": {
            **{name: repository.get(name) for name in _REPOSITORY_FIELDS},
            "url": repository.get("html_url"),
            "owner": (repository.get("owner") or {}).get("login"),
            "license": (repository.get("license") or {}).get("name"),
            "is_private": repository.get("private"),
            "is_fork": repository.get("fork"),
        },
        "analysis_metadata": {
            "analyzed_at": datetime.now(timezone.utc).isoformat(),
            "analyzer_version": ANALYZER_VERSION,
        },
    }
    export.update(additional)
    return export


def prepare_contributors_for_export(
    contributors: list[ContributorRecord],
) -> list[dict[str, Any]]:
    return [
        {name: contributor.get(name) for name in _CONTRIBUTOR_FIELDS}
        for contributor in contributors
    ]


def prepare_languages_for_export(languages: LanguageMap) -> list[dict[str, Any]]:
    """One row per language with its byte count and percentage (two decimals)."""
    total = sum(languages.values())
    return [
        {
            "language": name,
            "bytes": size,
            "percentage": f"{size / total * 100:.2f}" if total else "0.00",
        }
        for name, size in languages.items()
    ]


def prepare_commit_activity_for_export(
    activity: list[WeeklyActivityRecord],
) -> list[dict[str, Any]]:
    return [
        {
            "week_timestamp": week["week"],
            "week_date": datetime.fromtimestamp(week["week"], tz=timezone.utc).date().isoformat(),
            "total_commits": week.get("total"),
            "daily_commits": week.get("days"),
        }
        for week in activity
    ]
