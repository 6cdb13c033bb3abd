"""ghanalyzer exception classes."""

from enum import Enum


class ErrorKind(str, Enum):
    """User-facing classification of a failed GitHub call."""

    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    PRIVATE_OR_FORBIDDEN = "private_or_forbidden"
    NETWORK = "network"
    UNKNOWN = "unknown"


class GitHubAnalyzerError(Exception):
    """Base exception for all ghanalyzer errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        action: str | None = None,
        status: int | None = None,
        upstream_message: str | None = None,
    ) -> None:
        self.message = message
        self.action = action
        self.status = status
        self.upstream_message = upstream_message
        super().__init__(message)


class ConfigurationError(GitHubAnalyzerError):
    """Raised when SDK configuration is invalid or missing."""


class InvalidRepositoryURLError(GitHubAnalyzerError):
    """Raised when a repository URL cannot be parsed into owner and name."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid repository URL: {url!r}")
        self.url = url


class NotFoundError(GitHubAnalyzerError):
    """Raised when the repository or resource does not exist (404)."""

    kind = ErrorKind.NOT_FOUND


class RateLimitedError(GitHubAnalyzerError):
    """Raised when GitHub refuses the call because the quota is exhausted."""

    kind = ErrorKind.RATE_LIMITED


class PrivateRepositoryError(GitHubAnalyzerError):
    """Raised on a 403 that is not a rate limit (private repo, missing scope)."""

    kind = ErrorKind.PRIVATE_OR_FORBIDDEN


class NetworkError(GitHubAnalyzerError):
    """Raised when no response was received (connection failure, timeout)."""

    kind = ErrorKind.NETWORK


class UnknownAPIError(GitHubAnalyzerError):
    """Raised for any other failure, including calls malformed before sending."""

    kind = ErrorKind.UNKNOWN


ERROR_TYPES: dict[ErrorKind, type[GitHubAnalyzerError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.RATE_LIMITED: RateLimitedError,
    ErrorKind.PRIVATE_OR_FORBIDDEN: PrivateRepositoryError,
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.UNKNOWN: UnknownAPIError,
}
