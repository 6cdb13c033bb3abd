"""
ghanalyzer main client.

Provides the primary interface for analysing GitHub repositories.
"""

import os
from typing import Any

import httpx

from ghanalyzer.clients import ReposClient
from ghanalyzer.credentials import CredentialStore
from ghanalyzer.exceptions import ConfigurationError
from ghanalyzer.history import Bookmarks, SearchHistory
from ghanalyzer.storage import JSONFileStorage, MemoryStorage, Storage
from ghanalyzer.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HTTPTransport
from ghanalyzer.types.rate_limit import RateLimitInfo, RateLimitSnapshot

TOKEN_ENV = "GITHUB_TOKEN"
BASE_URL_ENV = "GHANALYZER_BASE_URL"
TIMEOUT_ENV = "GHANALYZER_TIMEOUT"
STORAGE_PATH_ENV = "GHANALYZER_STORAGE_PATH"


def settings_from_env() -> dict[str, Any]:
    """
    Read client settings from environment variables.

    Environment variables:
        GITHUB_TOKEN: Personal access token (optional)
        GHANALYZER_BASE_URL: API root (optional, default: https://api.github.com)
        GHANALYZER_TIMEOUT: Per-request timeout in seconds (optional, default: 30)
        GHANALYZER_STORAGE_PATH: JSON file for credential, history and bookmarks
            (optional, default: in-memory)

    Raises:
        ConfigurationError: If GHANALYZER_TIMEOUT is not a positive number
    """
    raw_timeout = os.environ.get(TIMEOUT_ENV)
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"Invalid {TIMEOUT_ENV}: {raw_timeout!r}. Must be a number of seconds"
            ) from None
        if timeout <= 0:
            raise ConfigurationError(f"Invalid {TIMEOUT_ENV}: {raw_timeout!r}. Must be positive")

    storage_path = os.environ.get(STORAGE_PATH_ENV)
    storage: Storage = JSONFileStorage(storage_path) if storage_path else MemoryStorage()

    return {
        "token": os.environ.get(TOKEN_ENV) or None,
        "base_url": os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
        "timeout": timeout,
        "storage": storage,
    }


class GitHubAnalyzerClient:
    """
    Main client for analysing GitHub repositories.

    Aggregates the repository resource client, the credential store, search
    history and bookmarks over one storage backend.

    Example:
        ```python
        from ghanalyzer import GitHubAnalyzerClient

        with GitHubAnalyzerClient() as client:
            repo = client.repos.get_repository("octocat", "Hello-World")
            print(repo["stargazers_count"])

            client.set_credential("ghp_...")   # next request is authenticated
            client.get_rate_limit_info().limit  # 5000
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
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Personal access token to store (optional; a token already
                in ``storage`` is used otherwise)
            storage: Backing storage (default: in-memory)
            base_url: API root (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            http_transport: Optional httpx transport (for tests and proxies)
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.credentials = CredentialStore(self.storage)
        if token:
            self.credentials.set_credential(token)

        self._transport = HTTPTransport(
            credentials=self.credentials,
            base_url=base_url,
            timeout=timeout,
            http_transport=http_transport,
        )

        self.repos = ReposClient(self._transport)
        self.history = SearchHistory(self.storage)
        self.bookmarks = Bookmarks(self.storage)

    @classmethod
    def from_env(
        cls, http_transport: httpx.BaseTransport | None = None
    ) -> "GitHubAnalyzerClient":
        """
        Create a client from environment variables (see ``settings_from_env``).

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls(http_transport=http_transport, **settings_from_env())

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    @property
    def rate_limit(self) -> RateLimitSnapshot | None:
        """Quota state observed on the most recent successful response."""
        return self._transport.rate_limit

    def set_credential(self, token: str | None) -> None:
        """Store a token, or clear it with None."""
        self.credentials.set_credential(token)

    def has_credential(self) -> bool:
        return self.credentials.has_credential()

    def get_rate_limit_info(self) -> RateLimitInfo:
        return self.credentials.get_rate_limit_info()

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitHubAnalyzerClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
