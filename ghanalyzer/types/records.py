"""GitHub REST payload types.

These are pass-through aliases over the decoded JSON. ghanalyzer never
reshapes upstream payloads, so the aliases document intent only.
"""

from typing import Any

RepositoryRecord = dict[str, Any]
ContributorRecord = dict[str, Any]
CommitRecord = dict[str, Any]
IssueRecord = dict[str, Any]
PullRequestRecord = dict[str, Any]
ReleaseRecord = dict[str, Any]
WeeklyActivityRecord = dict[str, Any]

# Language name -> bytes of code
LanguageMap = dict[str, int]

# Empty list, empty object or None while GitHub computes statistics
WeeklyActivity = list[WeeklyActivityRecord] | dict[str, Any] | None
