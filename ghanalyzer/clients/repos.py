"""Repository data resource client.

One method per GitHub REST resource. Each method issues exactly one GET and
returns the decoded payload unchanged; there is no retry, caching or
reshaping here.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from ghanalyzer.classifier import describe_invalid_call, raise_for_failure
from ghanalyzer.transport import repo_path
from ghanalyzer.types.records import (
    CommitRecord,
    ContributorRecord,
    IssueRecord,
    LanguageMap,
    PullRequestRecord,
    ReleaseRecord,
    RepositoryRecord,
    WeeklyActivity,
)

if TYPE_CHECKING:
    from ghanalyzer.transport import HTTPTransport

DEFAULT_PER_PAGE = 100
DEFAULT_STATE = "all"


def validate_repo_args(owner: Any, repo: Any, action: str) -> None:
    """Reject calls that cannot name a repository, before anything is sent."""
    for name, value in (("owner", owner), ("repo", repo)):
        if not isinstance(value, str) or not value.strip():
            raise_for_failure(
                describe_invalid_call(f"{name} must be a non-empty string, got {value!r}"),
                action,
            )


def format_since(since: datetime | str) -> str:
    """Render a ``since`` filter as ISO 8601."""
    if isinstance(since, datetime):
        return since.isoformat()
    return since


class ReposClient:
    """Client for repository data operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def _get(
        self,
        owner: str,
        repo: str,
        resource: str,
        action: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        validate_repo_args(owner, repo, action)
        return self.transport.get(repo_path(owner, repo, resource), action, params=params)

    def get_repository(self, owner: str, repo: str) -> RepositoryRecord:
        """
        Get repository metadata (stars, forks, topics, license, ...).

        Raises:
            NotFoundError: If the repository does not exist
            PrivateRepositoryError: If the repository is not visible to the credential
        """
        return self._get(owner, repo, "", "fetching repository data")

    def get_contributors(
        self, owner: str, repo: str, per_page: int = DEFAULT_PER_PAGE
    ) -> list[ContributorRecord]:
        """Get contributors ordered by number of commits."""
        return self._get(
            owner, repo, "contributors", "fetching contributors",
            params={"per_page": per_page},
        )

    def get_commits(
        self,
        owner: str,
        repo: str,
        per_page: int = DEFAULT_PER_PAGE,
        since: datetime | str | None = None,
    ) -> list[CommitRecord]:
        """
        Get commits on the default branch, newest first.

        Args:
            owner: Repository owner
            repo: Repository name
            per_page: Page size (max 100)
            since: Only commits after this time (datetime or ISO 8601 string)
        """
        params: dict[str, Any] = {"per_page": per_page}
        if since is not None:
            params["since"] = format_since(since)
        return self._get(owner, repo, "commits", "fetching commits", params=params)

    def get_languages(self, owner: str, repo: str) -> LanguageMap:
        """Get bytes of code per language."""
        return self._get(owner, repo, "languages", "fetching languages")

    def get_issues(
        self,
        owner: str,
        repo: str,
        per_page: int = DEFAULT_PER_PAGE,
        state: str = DEFAULT_STATE,
    ) -> list[IssueRecord]:
        """
        Get issues.

        GitHub's issue listing includes pull requests (entries carrying a
        ``pull_request`` key). They are returned as-is; use
        ``ghanalyzer.analytics.filter_issues`` for an issues-only view.

        Args:
            owner: Repository owner
            repo: Repository name
            per_page: Page size (max 100)
            state: "open", "closed" or "all"
        """
        return self._get(
            owner, repo, "issues", "fetching issues",
            params={"per_page": per_page, "state": state},
        )

    def get_pull_requests(
        self,
        owner: str,
        repo: str,
        per_page: int = DEFAULT_PER_PAGE,
        state: str = DEFAULT_STATE,
    ) -> list[PullRequestRecord]:
        """Get pull requests filtered by state ("open", "closed" or "all")."""
        return self._get(
            owner, repo, "pulls", "fetching pull requests",
            params={"per_page": per_page, "state": state},
        )

    def get_releases(
        self, owner: str, repo: str, per_page: int = DEFAULT_PER_PAGE
    ) -> list[ReleaseRecord]:
        """Get published releases."""
        return self._get(
            owner, repo, "releases", "fetching releases",
            params={"per_page": per_page},
        )

    def get_weekly_commit_activity(self, owner: str, repo: str) -> WeeklyActivity:
        """
        Get the last year of commit activity grouped by week.

        While GitHub is still computing the statistics it answers 202 with an
        empty body or an empty list. That payload is returned unchanged (None,
        ``{}`` or ``[]``) rather than raised; check it with
        ``ghanalyzer.analytics.is_activity_pending``.
        """
        return self._get(
            owner, repo, "stats/commit_activity", "fetching weekly commit activity"
        )
