"""
ghanalyzer logging utilities.

Provides configurable logging for HTTP requests/responses and rate-limit
observations. Ensures credentials (bearer tokens, personal access tokens)
are never logged.
"""

import logging
import re
from typing import Any

# Create SDK-specific loggers
_sdk_logger = logging.getLogger("ghanalyzer")
_http_logger = logging.getLogger("ghanalyzer.http")
_ratelimit_logger = logging.getLogger("ghanalyzer.ratelimit")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-\.]{8,}", re.IGNORECASE), r"\1 [REDACTED]"),
    # Classic and fine-grained GitHub personal access tokens
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = frozenset(
    {"authorization", "token", "secret", "password", "api_key", "github_api_key"}
)


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    ratelimit_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure ghanalyzer logging.

    Args:
        level: Default log level for all SDK loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        ratelimit_level: Log level for rate-limit observations (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from ghanalyzer.logging import configure_logging

        # Show every request and every rate-limit snapshot
        configure_logging(level=logging.INFO, http_level=logging.DEBUG,
                          ratelimit_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _ratelimit_logger.setLevel(ratelimit_level if ratelimit_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a ghanalyzer logger.

    Args:
        name: Logger name suffix (e.g., "http", "ratelimit"). If None, returns main SDK logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"ghanalyzer.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask credentials in a string.

    Args:
        text: Text that may contain tokens

    Returns:
        Text with tokens replaced by redacted placeholders
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(
    data: dict[str, Any], sensitive_keys: set[str] | frozenset[str] | None = None
) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Key matching is case-insensitive, so HTTP headers such as
    ``Authorization`` are caught.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Keys to mask (default: authorization, token, secret, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = str(key).lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with credentials masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        headers: Request headers (optional)
        params: Query parameters (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if params:
        log_parts.append(f"params={params}")

    if headers:
        log_parts.append(f"headers={safe_log_dict(dict(headers))}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Response bodies are not logged; GitHub listings can be large.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _http_logger.debug(" | ".join(log_parts))


# Export public API
__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
]
