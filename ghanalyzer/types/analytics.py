"""Derived analytics data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StateCounts:
    """Open/closed tallies for issues or pull requests."""

    open: int
    closed: int


@dataclass
class LanguageShare:
    """One language's share of a repository's code."""

    name: str
    bytes: int
    percentage: float


@dataclass
class AuthorActivity:
    """Number of issues opened by one user."""

    login: str
    count: int
    user: dict[str, Any] | None = None


@dataclass
class IssueStats:
    """Summary of a repository's issues (pull requests excluded)."""

    total: int
    open: int
    closed: int
    recent: int
    avg_resolution_days: int
    top_authors: list[AuthorActivity] = field(default_factory=list)
    top_labels: list[tuple[str, int]] = field(default_factory=list)
    recent_issues: list[dict[str, Any]] = field(default_factory=list)
