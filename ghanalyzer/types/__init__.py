"""ghanalyzer type definitions.

This module exports all data model types used by the SDK.
"""

from ghanalyzer.types.analytics import AuthorActivity, IssueStats, LanguageShare, StateCounts
from ghanalyzer.types.history import Bookmark, HistoryEntry
from ghanalyzer.types.rate_limit import RateLimitInfo, RateLimitSnapshot
from ghanalyzer.types.records import (
    CommitRecord,
    ContributorRecord,
    IssueRecord,
    LanguageMap,
    PullRequestRecord,
    ReleaseRecord,
    RepositoryRecord,
    WeeklyActivity,
    WeeklyActivityRecord,
)

__all__ = [
    # Upstream payloads
    "RepositoryRecord",
    "ContributorRecord",
    "CommitRecord",
    "IssueRecord",
    "PullRequestRecord",
    "ReleaseRecord",
    "LanguageMap",
    "WeeklyActivity",
    "WeeklyActivityRecord",
    # Rate limits
    "RateLimitInfo",
    "RateLimitSnapshot",
    # Analytics
    "StateCounts",
    "LanguageShare",
    "AuthorActivity",
    "IssueStats",
    # History
    "HistoryEntry",
    "Bookmark",
]
