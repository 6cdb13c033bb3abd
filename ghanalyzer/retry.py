"""
Optional retry wrappers for ghanalyzer.

The transports and resource clients never retry. Callers that want retries
wrap a call explicitly:

    repo = with_retry(lambda: client.repos.get_repository("octocat", "Hello-World"))
"""

import asyncio
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from ghanalyzer.exceptions import ErrorKind, GitHubAnalyzerError
from ghanalyzer.logging import get_logger

logger = get_logger()

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[ErrorKind] = field(
        default_factory=lambda: [ErrorKind.NETWORK, ErrorKind.RATE_LIMITED, ErrorKind.UNKNOWN]
    )
    initial_delay: float = 1.0  # Seconds before the first retry
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


def should_retry(error: BaseException, attempt: int, config: RetryConfig) -> bool:
    """
    Determine if a failed call should be retried.

    Args:
        error: The exception raised by the call
        attempt: Current attempt number (0-indexed)
        config: Retry configuration

    Returns:
        True if the call should be retried
    """
    if attempt >= config.max_retries:
        return False
    if not isinstance(error, GitHubAnalyzerError):
        return False
    return error.kind in config.retry_on


def get_backoff_time(attempt: int, config: RetryConfig) -> float:
    """
    Calculate how long to wait before the next attempt.

    Uses exponential backoff with jitter: ``initial_delay * backoff_factor ** attempt``,
    capped at ``max_backoff``.

    Args:
        attempt: Current attempt number (0-indexed)
        config: Retry configuration

    Returns:
        Time to wait in seconds
    """
    base_wait = config.initial_delay * config.backoff_factor ** attempt

    jitter_range = base_wait * config.jitter
    wait_time = base_wait + random.uniform(-jitter_range, jitter_range)

    return max(0.0, min(wait_time, config.max_backoff))


def with_retry(fn: Callable[[], T], config: RetryConfig | None = None) -> T:
    """
    Call ``fn`` and retry it on retryable ghanalyzer errors.

    ``max_retries`` counts retries, not attempts: the default config calls
    ``fn`` up to four times, waiting about 1s, 2s and 4s in between
    (exponential, with jitter). Pass ``RetryConfig(max_retries=2,
    backoff_factor=1.0)`` for a shorter schedule of three calls.

    Args:
        fn: Zero-argument callable making one request
        config: Retry configuration (default: RetryConfig())

    Returns:
        Whatever ``fn`` returns

    Raises:
        GitHubAnalyzerError: The last error, once retries are exhausted or the
            error is not retryable
    """
    config = config or RetryConfig()
    attempt = 0
    while True:
        try:
            return fn()
        except GitHubAnalyzerError as e:
            if not should_retry(e, attempt, config):
                raise
            wait_time = get_backoff_time(attempt, config)
            logger.info(
                "Retrying after %s (attempt %d/%d, waiting %.2fs)",
                e.kind.value, attempt + 1, config.max_retries, wait_time,
            )
            time.sleep(wait_time)
            attempt += 1


async def async_with_retry(
    fn: Callable[[], Awaitable[T]], config: RetryConfig | None = None
) -> T:
    """
    Await ``fn()`` and retry it on retryable ghanalyzer errors.

    Args:
        fn: Zero-argument callable returning a fresh awaitable per attempt
        config: Retry configuration (default: RetryConfig())

    Returns:
        Whatever the awaitable resolves to
    """
    config = config or RetryConfig()
    attempt = 0
    while True:
        try:
            return await fn()
        except GitHubAnalyzerError as e:
            if not should_retry(e, attempt, config):
                raise
            wait_time = get_backoff_time(attempt, config)
            logger.info(
                "Retrying after %s (attempt %d/%d, waiting %.2fs)",
                e.kind.value, attempt + 1, config.max_retries, wait_time,
            )
            await asyncio.sleep(wait_time)
            attempt += 1
