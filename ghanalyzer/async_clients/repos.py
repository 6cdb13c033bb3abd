"""Async repository data resource client."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from ghanalyzer.clients.repos import (
    DEFAULT_PER_PAGE,
    DEFAULT_STATE,
    format_since,
    validate_repo_args,
)
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
    from ghanalyzer.async_transport import AsyncHTTPTransport


class AsyncReposClient:
    """Async client for repository data operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async repos client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def _get(
        self,
        owner: str,
        repo: str,
        resource: str,
        action: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        validate_repo_args(owner, repo, action)
        return await self.transport.get(
            repo_path(owner, repo, resource), action, params=params
        )

    async def get_repository(self, owner: str, repo: str) -> RepositoryRecord:
        """Get repository metadata."""
        return await self._get(owner, repo, "", "fetching repository data")

    async def get_contributors(
        self, owner: str, repo: str, per_page: int = DEFAULT_PER_PAGE
    ) -> list[ContributorRecord]:
        """Get contributors ordered by number of commits."""
        return await self._get(
            owner, repo, "contributors", "fetching contributors",
            params={"per_page": per_page},
        )

    async def get_commits(
        self,
        owner: str,
        repo: str,
        per_page: int = DEFAULT_PER_PAGE,
        since: datetime | str | None = None,
    ) -> list[CommitRecord]:
        """Get commits on the default branch, optionally only those after ``since``."""
        params: dict[str, Any] = {"per_page": per_page}
        if since is not None:
            params["since"] = format_since(since)
        return await self._get(owner, repo, "commits", "fetching commits", params=params)

    async def get_languages(self, owner: str, repo: str) -> LanguageMap:
        """Get bytes of code per language."""
        return await self._get(owner, repo, "languages", "fetching languages")

    async def get_issues(
        self,
        owner: str,
        repo: str,
        per_page: int = DEFAULT_PER_PAGE,
        state: str = DEFAULT_STATE,
    ) -> list[IssueRecord]:
        """
        Get issues.

        The listing includes pull requests; filtering them out is up to the
        caller (see ``ghanalyzer.analytics.filter_issues``).
        """
        return await self._get(
            owner, repo, "issues", "fetching issues",
            params={"per_page": per_page, "state": state},
        )

    async def get_pull_requests(
        self,
        owner: str,
        repo: str,
        per_page: int = DEFAULT_PER_PAGE,
        state: str = DEFAULT_STATE,
    ) -> list[PullRequestRecord]:
        """Get pull requests filtered by state."""
        return await self._get(
            owner, repo, "pulls", "fetching pull requests",
            params={"per_page": per_page, "state": state},
        )

    async def get_releases(
        self, owner: str, repo: str, per_page: int = DEFAULT_PER_PAGE
    ) -> list[ReleaseRecord]:
        """Get published releases."""
        return await self._get(
            owner, repo, "releases", "fetching releases",
            params={"per_page": per_page},
        )

    async def get_weekly_commit_activity(self, owner: str, repo: str) -> WeeklyActivity:
        """Get weekly commit activity; a pending (202) payload is returned unchanged."""
        return await self._get(
            owner, repo, "stats/commit_activity", "fetching weekly commit activity"
        )
