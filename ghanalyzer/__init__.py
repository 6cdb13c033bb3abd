"""ghanalyzer - GitHub repository analysis SDK."""

from ghanalyzer.aggregate import (
    RepositoryStatistics,
    Settled,
    fetch_repository_statistics,
    gather_all,
    gather_settled,
)
from ghanalyzer.async_client import AsyncGitHubAnalyzerClient
from ghanalyzer.classifier import (
    FailureDescriptor,
    classify_failure,
    format_error_message,
)
from ghanalyzer.client import GitHubAnalyzerClient
from ghanalyzer.credentials import CredentialStore
from ghanalyzer.exceptions import (
    ConfigurationError,
    ErrorKind,
    GitHubAnalyzerError,
    InvalidRepositoryURLError,
    NetworkError,
    NotFoundError,
    PrivateRepositoryError,
    RateLimitedError,
    UnknownAPIError,
)
from ghanalyzer.logging import configure_logging, get_logger
from ghanalyzer.ratelimit import RateLimitObserver
from ghanalyzer.retry import RetryConfig, async_with_retry, with_retry
from ghanalyzer.storage import JSONFileStorage, MemoryStorage, Storage
from ghanalyzer.transport import HTTPTransport, build_client, build_headers
from ghanalyzer.urls import RepositoryRef, parse_repository_url

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Clients
    "GitHubAnalyzerClient",
    "AsyncGitHubAnalyzerClient",
    # Credentials & storage
    "CredentialStore",
    "Storage",
    "MemoryStorage",
    "JSONFileStorage",
    # Transport
    "HTTPTransport",
    "build_client",
    "build_headers",
    "RateLimitObserver",
    # Exceptions
    "ErrorKind",
    "GitHubAnalyzerError",
    "NotFoundError",
    "RateLimitedError",
    "PrivateRepositoryError",
    "NetworkError",
    "UnknownAPIError",
    "ConfigurationError",
    "InvalidRepositoryURLError",
    # Classification
    "FailureDescriptor",
    "classify_failure",
    "format_error_message",
    # Aggregation
    "RepositoryStatistics",
    "Settled",
    "fetch_repository_statistics",
    "gather_all",
    "gather_settled",
    # Retry
    "RetryConfig",
    "with_retry",
    "async_with_retry",
    # URLs
    "RepositoryRef",
    "parse_repository_url",
    # Logging
    "configure_logging",
    "get_logger",
]
