"""
Failure classification for ghanalyzer.

Every failed GitHub call is first normalized into a ``FailureDescriptor`` at
the transport boundary, then classified by ``classify_failure``. The
classification itself is a pure function and knows nothing about httpx.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NoReturn

import httpx

from ghanalyzer.exceptions import (
    ERROR_TYPES,
    ErrorKind,
    GitHubAnalyzerError,
    InvalidRepositoryURLError,
)

RATE_LIMIT_MARKER = "rate limit"

NETWORK_DETAIL = "No response received. Check your network connection."

ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Repository not found. Please check the URL and try again.",
    ErrorKind.RATE_LIMITED: (
        "Rate limit exceeded. Please try again later or use a GitHub token."
    ),
    ErrorKind.PRIVATE_OR_FORBIDDEN: (
        "This repository is private. Please use a GitHub token with proper permissions."
    ),
    ErrorKind.NETWORK: "Network error occurred. Please check your internet connection.",
    ErrorKind.UNKNOWN: "An unexpected error occurred. Please try again later.",
}

INVALID_URL_MESSAGE = (
    "Invalid repository URL. Please enter a valid GitHub repository URL."
)


@dataclass(frozen=True)
class FailureDescriptor:
    """
    Transport-independent description of a failed call.

    Attributes:
        has_response: True if an HTTP response was received
        status: HTTP status code of the response, if any
        body: Decoded response body (JSON value or text), if any
        has_request: True if the request was actually sent
        message: Raw error text from the transport or caller
    """

    has_response: bool
    status: int | None = None
    body: Any = None
    has_request: bool = True
    message: str | None = None


def describe_response(response: httpx.Response) -> FailureDescriptor:
    """Build a descriptor from a non-2xx (or undecodable) response."""
    try:
        body: Any = response.json()
    except ValueError:
        body = response.text or None

    return FailureDescriptor(
        has_response=True,
        status=response.status_code,
        body=body,
        has_request=True,
    )


def describe_request_error(error: Exception) -> FailureDescriptor:
    """
    Build a descriptor from an exception raised before any response arrived.

    ``httpx.RequestError`` instances carry the request that failed; anything
    else (invalid URLs, bad arguments) failed before transmission.
    """
    has_request = False
    if isinstance(error, httpx.RequestError):
        try:
            has_request = error.request is not None
        except RuntimeError:
            has_request = False

    return FailureDescriptor(
        has_response=False,
        has_request=has_request,
        message=str(error) or type(error).__name__,
    )


def describe_deadline_exceeded(timeout: float) -> FailureDescriptor:
    """Build a descriptor for a sent request that outlived its total deadline."""
    return FailureDescriptor(
        has_response=False,
        has_request=True,
        message=f"Request did not complete within {timeout:g}s",
    )


def describe_invalid_call(message: str) -> FailureDescriptor:
    """Build a descriptor for a call rejected before a request was built."""
    return FailureDescriptor(has_response=False, has_request=False, message=message)


def upstream_message(body: Any) -> str | None:
    """Extract GitHub's error message from a response body."""
    if isinstance(body, Mapping):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        return None
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


def classify_failure(failure: FailureDescriptor) -> tuple[ErrorKind, str]:
    """
    Classify a failure into an ErrorKind and a human-readable detail.

    Precedence:
        1. No response, request sent -> NETWORK
        2. 404 -> NOT_FOUND
        3. 403 mentioning a rate limit -> RATE_LIMITED, other 403 -> PRIVATE_OR_FORBIDDEN
        4. Any other status -> UNKNOWN with the upstream message
        5. No response and no request -> UNKNOWN with the raw message

    Args:
        failure: Normalized failure descriptor

    Returns:
        Tuple of (kind, detail message)
    """
    if not failure.has_response:
        if failure.has_request:
            detail = NETWORK_DETAIL
            if failure.message:
                detail = f"{detail} ({failure.message})"
            return ErrorKind.NETWORK, detail
        return ErrorKind.UNKNOWN, failure.message or "Unknown error"

    status = failure.status
    message = upstream_message(failure.body)

    if status == 404:
        return (
            ErrorKind.NOT_FOUND,
            f"Repository or resource not found ({status} - {message or 'Not Found'})",
        )

    if status == 403:
        if message and RATE_LIMIT_MARKER in message.lower():
            return ErrorKind.RATE_LIMITED, f"{status} - {message}"
        return ErrorKind.PRIVATE_OR_FORBIDDEN, f"{status} - {message or 'Forbidden'}"

    return ErrorKind.UNKNOWN, f"{status} - {message or 'Unknown error'}"


def error_for_failure(failure: FailureDescriptor, action: str) -> GitHubAnalyzerError:
    """Build the typed exception for a failure without raising it."""
    kind, detail = classify_failure(failure)
    upstream = None
    if failure.has_response and not 200 <= (failure.status or 0) < 300:
        upstream = upstream_message(failure.body)
    return ERROR_TYPES[kind](
        f"Error {action}: {detail}",
        action=action,
        status=failure.status,
        upstream_message=upstream,
    )


def raise_for_failure(
    failure: FailureDescriptor,
    action: str,
    cause: BaseException | None = None,
) -> NoReturn:
    """
    Classify a failure and raise the matching exception.

    Args:
        failure: Normalized failure descriptor
        action: Description of what was being done (e.g., "fetching issues")
        cause: Original exception to chain, if any

    Raises:
        GitHubAnalyzerError: Always
    """
    raise error_for_failure(failure, action) from cause


def format_error_message(
    error: BaseException | ErrorKind | None,
    messages: Mapping[ErrorKind, str] | None = None,
) -> str:
    """
    Map an error to friendly user-facing copy.

    This is the extension point for presentation layers: pass ``messages`` to
    override the copy for any kind. An UNKNOWN error that carries GitHub's own
    message (a 422 or 500, say) is rendered with that message. Errors that are
    not ghanalyzer errors are rendered with their own text.

    Args:
        error: A raised exception, an ErrorKind, or None
        messages: Optional replacement copy keyed by ErrorKind

    Returns:
        Message suitable for showing to a user
    """
    copy = {**ERROR_MESSAGES, **(messages or {})}

    if error is None:
        return copy[ErrorKind.UNKNOWN]
    if isinstance(error, ErrorKind):
        return copy[error]
    if isinstance(error, InvalidRepositoryURLError):
        return INVALID_URL_MESSAGE
    if isinstance(error, GitHubAnalyzerError):
        if error.kind is ErrorKind.UNKNOWN and error.upstream_message:
            return error.upstream_message
        return copy[error.kind]
    return str(error) or copy[ErrorKind.UNKNOWN]
