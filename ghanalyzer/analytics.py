"""
Derived repository analytics.

Pure functions over the payloads returned by the resource clients. Nothing
here performs I/O.
"""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from ghanalyzer.types.analytics import (
    AuthorActivity,
    IssueStats,
    LanguageShare,
    StateCounts,
)
from ghanalyzer.types.records import (
    CommitRecord,
    IssueRecord,
    LanguageMap,
    WeeklyActivity,
    WeeklyActivityRecord,
)

RECENT_WINDOW = timedelta(days=30)
TOP_AUTHORS = 5
TOP_LABELS = 8
RECENT_ISSUES_SHOWN = 5


def parse_timestamp(value: str) -> datetime:
    """Parse GitHub's ``2024-01-31T12:00:00Z`` timestamps into aware datetimes."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_issues(issues: Iterable[IssueRecord]) -> list[IssueRecord]:
    """Drop pull requests from an issue listing."""
    return [issue for issue in issues if not issue.get("pull_request")]


def count_by_state(records: Iterable[dict[str, Any]]) -> StateCounts:
    """Count open and closed issues or pull requests."""
    states = Counter(record.get("state") for record in records)
    return StateCounts(open=states["open"], closed=states["closed"])


def compute_issue_stats(
    issues: Iterable[IssueRecord], now: datetime | None = None
) -> IssueStats:
    """
    Summarize an issue listing.

    Pull requests are excluded first. "Recent" means created within the last
    30 days of ``now``; resolution time is averaged over closed issues that
    carry a ``closed_at`` timestamp and rounded to whole days.

    Args:
        issues: Payload from ``get_issues``
        now: Reference time (default: current UTC time)

    Returns:
        IssueStats for the repository
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - RECENT_WINDOW

    actual = filter_issues(issues)
    counts = count_by_state(actual)

    recent = [
        issue for issue in actual
        if issue.get("created_at") and parse_timestamp(issue["created_at"]) >= cutoff
    ]

    resolution_days = [
        (parse_timestamp(issue["closed_at"]) - parse_timestamp(issue["created_at"]))
        / timedelta(days=1)
        for issue in actual
        if issue.get("state") == "closed" and issue.get("closed_at") and issue.get("created_at")
    ]
    avg_resolution = sum(resolution_days) / len(resolution_days) if resolution_days else 0.0

    authors: Counter[str] = Counter()
    users: dict[str, dict[str, Any]] = {}
    labels: Counter[str] = Counter()
    for issue in actual:
        user = issue.get("user") or {}
        login = user.get("login")
        if login:
            authors[login] += 1
            users.setdefault(login, user)
        for label in issue.get("labels") or []:
            name = label.get("name") if isinstance(label, dict) else label
            if name:
                labels[name] += 1

    return IssueStats(
        total=len(actual),
        open=counts.open,
        closed=counts.closed,
        recent=len(recent),
        avg_resolution_days=round(avg_resolution),
        top_authors=[
            AuthorActivity(login=login, count=count, user=users.get(login))
            for login, count in authors.most_common(TOP_AUTHORS)
        ],
        top_labels=labels.most_common(TOP_LABELS),
        recent_issues=recent[:RECENT_ISSUES_SHOWN],
    )


def language_breakdown(languages: LanguageMap) -> list[LanguageShare]:
    """
    Turn a language byte map into shares sorted by size.

    Percentages are rounded to one decimal place. An empty map gives an empty list.
    """
    total = sum(languages.values())
    if not total:
        return []
    shares = [
        LanguageShare(name=name, bytes=size, percentage=round(size / total * 100, 1))
        for name, size in languages.items()
    ]
    return sorted(shares, key=lambda share: share.bytes, reverse=True)


def format_bytes(size: int) -> str:
    """Format a byte count as a human-readable string (e.g., ``1.5 KB``)."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def monthly_commit_counts(commits: Iterable[CommitRecord]) -> dict[str, int]:
    """
    Count commits per calendar month of their author date.

    Returns:
        Mapping of ``YYYY-MM`` to commit count, in chronological order
    """
    months: Counter[str] = Counter()
    for commit in commits:
        author = (commit.get("commit") or {}).get("author") or {}
        date = author.get("date")
        if date:
            months[parse_timestamp(date).strftime("%Y-%m")] += 1
    return dict(sorted(months.items()))


def is_activity_pending(activity: WeeklyActivity) -> bool:
    """
    Return True while GitHub is still computing commit statistics.

    The statistics endpoint answers with no body, an empty object or an empty
    list until the data is ready. That is a pending state, not an error.
    """
    return not isinstance(activity, list) or len(activity) == 0


def weekly_totals(activity: list[WeeklyActivityRecord]) -> list[tuple[datetime, int]]:
    """Pair each week's start (UTC) with its commit total."""
    return [
        (datetime.fromtimestamp(week["week"], tz=timezone.utc), week.get("total", 0))
        for week in activity
    ]
