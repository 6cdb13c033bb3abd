"""
Fan-out/join helpers for composite repository views.

Several resource calls are started together and joined with one of two
policies:

- ``gather_all``: all-or-nothing; the first failure propagates.
- ``gather_settled``: best-effort; every call's outcome is reported on its own.

No result is ever replaced by a default value when its call fails.
"""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ghanalyzer.analytics import count_by_state, filter_issues, language_breakdown
from ghanalyzer.logging import get_logger
from ghanalyzer.types.analytics import LanguageShare, StateCounts
from ghanalyzer.types.records import IssueRecord, LanguageMap, PullRequestRecord

if TYPE_CHECKING:
    from ghanalyzer.async_clients.repos import AsyncReposClient

logger = get_logger()

T = TypeVar("T")


@dataclass
class Settled(Generic[T]):
    """Outcome of one call in a best-effort fan-out."""

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the call's error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """
    Run awaitables concurrently; fail as soon as any one fails.

    Calls still in flight when one fails are left to finish; their results are
    discarded.
    """
    return list(await asyncio.gather(*aws))


async def gather_settled(*aws: Awaitable[Any]) -> list[Settled[Any]]:
    """
    Run awaitables concurrently and report every outcome independently.

    Only ``Exception`` subclasses are captured; cancellation still propagates.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    settled: list[Settled[Any]] = []
    for result in results:
        if isinstance(result, Exception):
            settled.append(Settled(error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            settled.append(Settled(value=result))
    return settled


@dataclass
class RepositoryStatistics:
    """
    Languages, issue and pull request summary for one repository.

    With a best-effort fetch, a part whose call failed is None and its error
    is kept in ``errors`` under the part's name.
    """

    owner: str
    repo: str
    languages: LanguageMap | None = None
    issues: list[IssueRecord] | None = None
    pull_requests: list[PullRequestRecord] | None = None
    errors: dict[str, BaseException] = field(default_factory=dict)

    @property
    def language_shares(self) -> list[LanguageShare] | None:
        if self.languages is None:
            return None
        return language_breakdown(self.languages)

    @property
    def issue_counts(self) -> StateCounts | None:
        """Open/closed issue counts, pull requests excluded."""
        if self.issues is None:
            return None
        return count_by_state(filter_issues(self.issues))

    @property
    def pull_request_counts(self) -> StateCounts | None:
        if self.pull_requests is None:
            return None
        return count_by_state(self.pull_requests)


async def fetch_repository_statistics(
    repos: "AsyncReposClient",
    owner: str,
    repo: str,
    per_page: int = 100,
    best_effort: bool = False,
) -> RepositoryStatistics:
    """
    Fetch languages, issues and pull requests concurrently.

    Args:
        repos: Async repository client
        owner: Repository owner
        repo: Repository name
        per_page: Page size for the issue and pull request listings
        best_effort: Keep the parts that succeeded instead of failing outright

    Returns:
        RepositoryStatistics

    Raises:
        GitHubAnalyzerError: The first failure, unless best_effort is set
    """
    calls = (
        repos.get_languages(owner, repo),
        repos.get_issues(owner, repo, per_page=per_page),
        repos.get_pull_requests(owner, repo, per_page=per_page),
    )

    if not best_effort:
        languages, issues, pulls = await gather_all(*calls)
        return RepositoryStatistics(
            owner=owner,
            repo=repo,
            languages=languages,
            issues=issues,
            pull_requests=pulls,
        )

    names = ("languages", "issues", "pull_requests")
    stats = RepositoryStatistics(owner=owner, repo=repo)
    for name, outcome in zip(names, await gather_settled(*calls)):
        if outcome.ok:
            setattr(stats, name, outcome.value)
        else:
            logger.warning("Could not fetch %s for %s/%s: %s", name, owner, repo, outcome.error)
            stats.errors[name] = outcome.error
    return stats
