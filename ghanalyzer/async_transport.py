"""
Async HTTP Transport for ghanalyzer.

Same contract as ``HTTPTransport`` on top of ``httpx.AsyncClient``, so that
several Gateway calls can be in flight at once on one event loop.
"""

import asyncio
import time
from typing import Any

import httpx

from ghanalyzer.classifier import (
    describe_deadline_exceeded,
    describe_request_error,
    describe_response,
    raise_for_failure,
)
from ghanalyzer.credentials import CredentialStore
from ghanalyzer.logging import log_http_request, log_http_response
from ghanalyzer.ratelimit import RateLimitObserver
from ghanalyzer.transport import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    build_headers,
    decode_response,
)
from ghanalyzer.types.rate_limit import RateLimitSnapshot


def build_async_client(
    credential: str | None = None,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build an async httpx client bound to the GitHub API.

    Args:
        credential: Personal access token, or None
        base_url: API root (default: https://api.github.com)
        timeout: Per-phase httpx timeout in seconds
        transport: Optional async httpx transport (e.g., httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        headers=build_headers(credential),
        follow_redirects=True,
        transport=transport,
    )


class AsyncHTTPTransport:
    """
    Async HTTP transport bound to a credential store.

    Handles:
    - Lazy client construction, rebuilt after any credential change
    - Failure classification into typed exceptions
    - Rate-limit observation on successful responses
    - A total deadline of ``timeout`` seconds per call

    A client replaced after a credential change is closed once its last
    in-flight request finishes.
    """

    def __init__(
        self,
        credentials: CredentialStore | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
        rate_limit_observer: RateLimitObserver | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            credentials: Credential store (default: empty in-memory store)
            base_url: Base URL for API requests
            timeout: Request timeout in seconds, per phase and for the whole call
            http_transport: Optional async httpx transport used by every built client
            rate_limit_observer: Observer for quota headers
        """
        self.credentials = credentials if credentials is not None else CredentialStore()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http_transport = http_transport
        self.rate_limit_observer = rate_limit_observer or RateLimitObserver()

        self._client: httpx.AsyncClient | None = None
        self._retired: list[httpx.AsyncClient] = []
        self._in_flight: dict[httpx.AsyncClient, int] = {}
        self.credentials.add_listener(self._invalidate)

    def _invalidate(self) -> None:
        if self._client is not None:
            self._retired.append(self._client)
            self._client = None

    async def _reap_retired(self) -> None:
        """Close retired clients that have no request in flight."""
        idle = [client for client in self._retired if not self._in_flight.get(client)]
        for client in idle:
            self._retired.remove(client)
            await client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        """The current client, built on first use after a credential change."""
        if self._client is None:
            self._client = build_async_client(
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

    async def close(self) -> None:
        """Close every client this transport has built."""
        self.credentials.remove_listener(self._invalidate)
        for client in self._retired:
            await client.aclose()
        self._retired.clear()
        self._in_flight.clear()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(
        self,
        path: str,
        action: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a single GET request.

        Args:
            path: API path (e.g., "/repos/octocat/Hello-World")
            action: What the call does, used in error messages
            params: Query parameters

        Returns:
            Decoded JSON payload, unchanged

        Raises:
            GitHubAnalyzerError: Classified failure (never retried)
        """
        await self._reap_retired()
        client = self.client
        log_http_request("GET", f"{self.base_url}{path}", dict(client.headers), params)

        self._in_flight[client] = self._in_flight.get(client, 0) + 1
        started = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                client.get(path, params=params), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise_for_failure(describe_deadline_exceeded(self.timeout), action, cause=e)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise_for_failure(describe_request_error(e), action, cause=e)
        finally:
            remaining = self._in_flight.get(client, 1) - 1
            if remaining > 0:
                self._in_flight[client] = remaining
            else:
                self._in_flight.pop(client, None)
                if client in self._retired:
                    self._retired.remove(client)
                    await client.aclose()

        log_http_response(
            response.status_code,
            str(response.url),
            (time.perf_counter() - started) * 1000,
        )

        if not response.is_success:
            raise_for_failure(describe_response(response), action)

        self.rate_limit_observer.observe(response.headers)
        return decode_response(response, action)
