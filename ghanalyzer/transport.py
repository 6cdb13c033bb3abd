"""
HTTP Transport for ghanalyzer.

Builds credential-bound httpx clients for the GitHub REST API and executes
requests, routing every failure through the error classifier and every
success through the rate-limit observer.
"""

import time
from typing import Any
from urllib.parse import quote

import httpx

from ghanalyzer.classifier import (
    describe_request_error,
    describe_response,
    raise_for_failure,
)
from ghanalyzer.credentials import CredentialStore
from ghanalyzer.logging import log_http_request, log_http_response
from ghanalyzer.ratelimit import RateLimitObserver
from ghanalyzer.types.rate_limit import RateLimitSnapshot

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
GITHUB_MEDIA_TYPE = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "ghanalyzer-python"


def build_headers(credential: str | None) -> dict[str, str]:
    """
    Compute request headers for a credential.

    Args:
        credential: Personal access token, or None for anonymous requests

    Returns:
        Headers with Accept, API version and, when a token is given, Authorization
    """
    headers = {
        "Accept": GITHUB_MEDIA_TYPE,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": USER_AGENT,
    }
    if credential:
        headers["Authorization"] = f"Bearer {credential}"
    return headers


def build_client(
    credential: str | None = None,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """
    Build an httpx client bound to the GitHub API.

    No network I/O happens here; building twice with the same inputs yields
    equivalent clients.

    Args:
        credential: Personal access token, or None
        base_url: API root (default: https://api.github.com)
        timeout: Limit in seconds applied by httpx to each phase of a request
            (connect, write, read, pool acquisition). A response trickled in
            below the read limit can take longer overall; the async transport
            also enforces this value as a total deadline.
        transport: Optional httpx transport (e.g., httpx.MockTransport in tests)

    Returns:
        Configured httpx.Client
    """
    return httpx.Client(
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        headers=build_headers(credential),
        follow_redirects=True,
        transport=transport,
    )


def repo_path(owner: str, repo: str, resource: str = "") -> str:
    """Build ``/repos/{owner}/{repo}[/resource]`` with both segments escaped."""
    path = f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
    if resource:
        path = f"{path}/{resource.lstrip('/')}"
    return path


def decode_response(response: httpx.Response, action: str) -> Any:
    """
    Decode a successful response body unchanged.

    An empty body (e.g., a 202 from the statistics endpoints) decodes to None.

    Raises:
        UnknownAPIError: If a non-empty body is not valid JSON
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise_for_failure(describe_response(response), action, cause=e)


class HTTPTransport:
    """
    HTTP transport bound to a credential store.

    Handles:
    - Lazy client construction, rebuilt after any credential change
    - Failure classification into typed exceptions
    - Rate-limit observation on successful responses

    There is no retry, caching, throttling or de-duplication here.
    """

    def __init__(
        self,
        credentials: CredentialStore | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.BaseTransport | None = None,
        rate_limit_observer: RateLimitObserver | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            credentials: Credential store (default: empty in-memory store)
            base_url: Base URL for API requests
            timeout: Request timeout in seconds
            http_transport: Optional httpx transport used by every built client
            rate_limit_observer: Observer for quota headers
        """
        self.credentials = credentials if credentials is not None else CredentialStore()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http_transport = http_transport
        self.rate_limit_observer = rate_limit_observer or RateLimitObserver()

        self._client: httpx.Client | None = None
        self.credentials.add_listener(self._invalidate)

    def _invalidate(self) -> None:
        # Sync requests never overlap a credential change, so the old client is idle.
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def client(self) -> httpx.Client:
        """The current client, built on first use after a credential change."""
        if self._client is None:
            self._client = build_client(
                credential=self.credentials.get_credential(),
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.http_transport,
            )
        return self._client

    @property
    def headers(self) -> httpx.Headers:
        """Headers the next request will carry."""
        return httpx.Headers(self.client.headers)

    @property
    def rate_limit(self) -> RateLimitSnapshot | None:
        """Most recent rate-limit snapshot, if any response carried one."""
        return self.rate_limit_observer.latest

    def close(self) -> None:
        """Close every client this transport has built."""
        self.credentials.remove_listener(self._invalidate)
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(
        self,
        path: str,
        action: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a single GET request.

        Args:
            path: API path (e.g., "/repos/octocat/Hello-World")
            action: What the call does, used in error messages (e.g., "fetching issues")
            params: Query parameters

        Returns:
            Decoded JSON payload, unchanged

        Raises:
            GitHubAnalyzerError: Classified failure (never retried)
        """
        client = self.client
        log_http_request("GET", f"{self.base_url}{path}", dict(client.headers), params)

        started = time.perf_counter()
        try:
            response = client.get(path, params=params)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise_for_failure(describe_request_error(e), action, cause=e)

        log_http_response(
            response.status_code,
            str(response.url),
            (time.perf_counter() - started) * 1000,
        )

        if not response.is_success:
            raise_for_failure(describe_response(response), action)

        self.rate_limit_observer.observe(response.headers)
        return decode_response(response, action)
