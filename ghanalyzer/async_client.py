"""
ghanalyzer async client.

Provides the async interface for analysing GitHub repositories, for callers
that fan out several resource requests at once.
"""

from typing import Any

import httpx

from ghanalyzer.aggregate import RepositoryStatistics, fetch_repository_statistics
from ghanalyzer.async_clients import AsyncReposClient
from ghanalyzer.async_transport import AsyncHTTPTransport
from ghanalyzer.client import settings_from_env
from ghanalyzer.credentials import CredentialStore
from ghanalyzer.history import Bookmarks, SearchHistory
from ghanalyzer.storage import MemoryStorage, Storage
from ghanalyzer.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ghanalyzer.types.rate_limit import RateLimitInfo, RateLimitSnapshot


class AsyncGitHubAnalyzerClient:
    """
    Async client for analysing GitHub repositories.

    Example:
        ```python
        import asyncio
        from ghanalyzer import AsyncGitHubAnalyzerClient

        async def main():
            async with AsyncGitHubAnalyzerClient() as client:
                stats = await client.repository_statistics("octocat", "Hello-World")
                print(stats.issue_counts, stats.language_shares)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = DEFAULT_TIMEOUT

    def __init__(
        self,
        token: str | None = None,
        storage: Storage | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async client.

        Args:
            token: Personal access token to store (optional)
            storage: Backing storage (default: in-memory)
            base_url: API root (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            http_transport: Optional async httpx transport
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.credentials = CredentialStore(self.storage)
        if token:
            self.credentials.set_credential(token)

        self._transport = AsyncHTTPTransport(
            credentials=self.credentials,
            base_url=base_url,
            timeout=timeout,
            http_transport=http_transport,
        )

        self.repos = AsyncReposClient(self._transport)
        self.history = SearchHistory(self.storage)
        self.bookmarks = Bookmarks(self.storage)

    @classmethod
    def from_env(
        cls, http_transport: httpx.AsyncBaseTransport | None = None
    ) -> "AsyncGitHubAnalyzerClient":
        """Create a client from environment variables (see ``settings_from_env``)."""
        return cls(http_transport=http_transport, **settings_from_env())

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport."""
        return self._transport

    @property
    def rate_limit(self) -> RateLimitSnapshot | None:
        return self._transport.rate_limit

    def set_credential(self, token: str | None) -> None:
        self.credentials.set_credential(token)

    def has_credential(self) -> bool:
        return self.credentials.has_credential()

    def get_rate_limit_info(self) -> RateLimitInfo:
        return self.credentials.get_rate_limit_info()

    async def repository_statistics(
        self, owner: str, repo: str, best_effort: bool = False
    ) -> RepositoryStatistics:
        """Fetch languages, issues and pull requests concurrently."""
        return await fetch_repository_statistics(
            self.repos, owner, repo, best_effort=best_effort
        )

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubAnalyzerClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
