"""
Property-based tests for failure classification.

Feature: ghanalyzer
"""

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ghanalyzer.classifier import (
    ERROR_MESSAGES,
    INVALID_URL_MESSAGE,
    FailureDescriptor,
    classify_failure,
    describe_deadline_exceeded,
    describe_invalid_call,
    describe_request_error,
    describe_response,
    error_for_failure,
    format_error_message,
    raise_for_failure,
)
from ghanalyzer.exceptions import (
    ErrorKind,
    InvalidRepositoryURLError,
    NotFoundError,
    PrivateRepositoryError,
    RateLimitedError,
    UnknownAPIError,
)

message_strategy = st.text(max_size=80)
status_strategy = st.integers(min_value=100, max_value=599)
body_strategy = st.one_of(
    st.none(),
    message_strategy,
    st.fixed_dictionaries({"message": message_strategy}),
    st.dictionaries(st.text(max_size=10), st.integers(), max_size=3),
)


def expected_kind(failure: FailureDescriptor) -> ErrorKind:
    if not failure.has_response:
        return ErrorKind.NETWORK if failure.has_request else ErrorKind.UNKNOWN
    if failure.status == 404:
        return ErrorKind.NOT_FOUND
    if failure.status == 403:
        body = failure.body
        if isinstance(body, dict):
            text = body.get("message")
        else:
            text = body
        if isinstance(text, str) and "rate limit" in text.lower():
            return ErrorKind.RATE_LIMITED
        return ErrorKind.PRIVATE_OR_FORBIDDEN
    return ErrorKind.UNKNOWN


failure_strategy = st.one_of(
    st.builds(
        FailureDescriptor,
        has_response=st.just(True),
        status=status_strategy,
        body=body_strategy,
        has_request=st.just(True),
    ),
    st.builds(
        FailureDescriptor,
        has_response=st.just(False),
        has_request=st.booleans(),
        message=st.one_of(st.none(), message_strategy),
    ),
)


@given(failure=failure_strategy)
@settings(max_examples=200)
def test_property_classification_is_total_and_deterministic(failure: FailureDescriptor) -> None:
    """
    Every failure maps to exactly one kind, following the fixed precedence,
    and classifying it twice gives the same answer.
    """
    kind, detail = classify_failure(failure)

    assert kind is expected_kind(failure)
    assert isinstance(detail, str) and detail
    assert classify_failure(failure) == (kind, detail)


@given(status=status_strategy.filter(lambda s: s not in (403, 404)), message=message_strategy)
@settings(max_examples=100)
def test_property_other_statuses_keep_upstream_message(status: int, message: str) -> None:
    """Statuses other than 403/404 are UNKNOWN and carry the status and message."""
    failure = FailureDescriptor(has_response=True, status=status, body={"message": message})

    kind, detail = classify_failure(failure)

    assert kind is ErrorKind.UNKNOWN
    assert detail.startswith(f"{status} - ")
    if message:
        assert detail == f"{status} - {message}"


class TestPrecedence:
    """Tests for the individual classification rules."""

    def test_no_response_with_request_is_network(self) -> None:
        kind, detail = classify_failure(
            FailureDescriptor(has_response=False, has_request=True, message="Connection refused")
        )

        assert kind is ErrorKind.NETWORK
        assert detail == (
            "No response received. Check your network connection. (Connection refused)"
        )

    def test_no_response_without_request_is_unknown(self) -> None:
        kind, detail = classify_failure(describe_invalid_call("owner must be a non-empty string"))

        assert kind is ErrorKind.UNKNOWN
        assert detail == "owner must be a non-empty string"

    def test_not_found(self) -> None:
        kind, detail = classify_failure(
            FailureDescriptor(has_response=True, status=404, body={"message": "Not Found"})
        )

        assert kind is ErrorKind.NOT_FOUND
        assert detail == "Repository or resource not found (404 - Not Found)"

    def test_forbidden_rate_limit(self) -> None:
        body = {"message": "API rate limit exceeded for 203.0.113.7."}

        kind, _ = classify_failure(FailureDescriptor(has_response=True, status=403, body=body))

        assert kind is ErrorKind.RATE_LIMITED

    def test_rate_limit_match_is_case_insensitive(self) -> None:
        body = {"message": "You have exceeded a secondary Rate Limit."}

        kind, _ = classify_failure(FailureDescriptor(has_response=True, status=403, body=body))

        assert kind is ErrorKind.RATE_LIMITED

    def test_forbidden_without_rate_limit_is_private(self) -> None:
        body = {"message": "Resource not accessible by integration"}

        kind, detail = classify_failure(
            FailureDescriptor(has_response=True, status=403, body=body)
        )

        assert kind is ErrorKind.PRIVATE_OR_FORBIDDEN
        assert detail == "403 - Resource not accessible by integration"

    def test_forbidden_without_body_is_private(self) -> None:
        kind, _ = classify_failure(FailureDescriptor(has_response=True, status=403))

        assert kind is ErrorKind.PRIVATE_OR_FORBIDDEN

    def test_too_many_requests_is_unknown(self) -> None:
        """429 has no dedicated rule and falls through to UNKNOWN."""
        body = {"message": "API rate limit exceeded"}

        kind, detail = classify_failure(
            FailureDescriptor(has_response=True, status=429, body=body)
        )

        assert kind is ErrorKind.UNKNOWN
        assert detail == "429 - API rate limit exceeded"

    def test_server_error_with_text_body(self) -> None:
        kind, detail = classify_failure(
            FailureDescriptor(has_response=True, status=502, body="Bad Gateway\n")
        )

        assert kind is ErrorKind.UNKNOWN
        assert detail == "502 - Bad Gateway"


class TestDescriptors:
    """Tests for building descriptors from httpx objects."""

    def test_describe_json_response(self) -> None:
        request = httpx.Request("GET", "https://api.github.com/repos/a/b")
        response = httpx.Response(404, json={"message": "Not Found"}, request=request)

        failure = describe_response(response)

        assert failure == FailureDescriptor(
            has_response=True, status=404, body={"message": "Not Found"}, has_request=True
        )

    def test_describe_text_response(self) -> None:
        response = httpx.Response(500, content=b"upstream exploded")

        failure = describe_response(response)

        assert failure.body == "upstream exploded"
        assert failure.status == 500

    def test_describe_empty_response(self) -> None:
        failure = describe_response(httpx.Response(500))

        assert failure.body is None

    def test_describe_request_error_with_request(self) -> None:
        request = httpx.Request("GET", "https://api.github.com/repos/a/b")
        error = httpx.ConnectError("boom", request=request)

        failure = describe_request_error(error)

        assert not failure.has_response
        assert failure.has_request
        assert failure.message == "boom"

    def test_describe_request_error_without_request(self) -> None:
        """An httpx error never bound to a request failed before sending."""
        failure = describe_request_error(httpx.ConnectError("boom"))

        assert not failure.has_request

    def test_describe_non_httpx_error(self) -> None:
        failure = describe_request_error(ValueError())

        assert not failure.has_request
        assert failure.message == "ValueError"


class TestRaising:
    """Tests for turning classifications into exceptions."""

    @pytest.mark.parametrize(
        ("status", "body", "error_type"),
        [
            (404, {"message": "Not Found"}, NotFoundError),
            (403, {"message": "API rate limit exceeded"}, RateLimitedError),
            (403, {"message": "Forbidden"}, PrivateRepositoryError),
            (500, {"message": "Server Error"}, UnknownAPIError),
        ],
    )
    def test_error_type_matches_kind(self, status, body, error_type) -> None:
        failure = FailureDescriptor(has_response=True, status=status, body=body)

        error = error_for_failure(failure, "fetching issues")

        assert type(error) is error_type
        assert error.kind is classify_failure(failure)[0]
        assert error.status == status
        assert error.action == "fetching issues"
        assert error.message.startswith("Error fetching issues: ")

    def test_raise_chains_cause(self) -> None:
        cause = RuntimeError("original")

        with pytest.raises(UnknownAPIError) as exc_info:
            raise_for_failure(describe_invalid_call("bad"), "fetching commits", cause)

        assert exc_info.value.__cause__ is cause
        assert str(exc_info.value) == "Error fetching commits: bad"


class TestFormatErrorMessage:
    """Tests for user-facing copy."""

    def test_kind_maps_to_default_copy(self) -> None:
        for kind in ErrorKind:
            assert format_error_message(kind) == ERROR_MESSAGES[kind]

    def test_error_maps_through_its_kind(self) -> None:
        error = NotFoundError("Error fetching repository data: 404")

        assert format_error_message(error) == ERROR_MESSAGES[ErrorKind.NOT_FOUND]

    def test_invalid_url(self) -> None:
        assert format_error_message(InvalidRepositoryURLError("nope")) == INVALID_URL_MESSAGE

    def test_custom_copy_overrides_default(self) -> None:
        messages = {ErrorKind.RATE_LIMITED: "Slow down."}

        assert format_error_message(RateLimitedError("x"), messages) == "Slow down."
        assert format_error_message(ErrorKind.NETWORK, messages) == (
            ERROR_MESSAGES[ErrorKind.NETWORK]
        )

    def test_foreign_errors_use_their_text(self) -> None:
        assert format_error_message(ValueError("bad input")) == "bad input"
        assert format_error_message(None) == ERROR_MESSAGES[ErrorKind.UNKNOWN]

    @pytest.mark.parametrize(
        ("status", "message"),
        [(422, "Validation Failed: bad since"), (500, "Server Error")],
    )
    def test_unknown_error_shows_upstream_message(self, status, message) -> None:
        error = error_for_failure(
            FailureDescriptor(has_response=True, status=status, body={"message": message}),
            "fetching commits",
        )

        assert error.upstream_message == message
        assert format_error_message(error) == message

    def test_unknown_error_without_upstream_message_uses_default_copy(self) -> None:
        no_body = error_for_failure(
            FailureDescriptor(has_response=True, status=500, body=None), "fetching commits"
        )
        undecodable = error_for_failure(
            FailureDescriptor(has_response=True, status=200, body="<html>"), "fetching commits"
        )
        rejected = error_for_failure(describe_invalid_call("owner is required"), "fetching commits")

        for error in (no_body, undecodable, rejected):
            assert error.upstream_message is None
            assert format_error_message(error) == ERROR_MESSAGES[ErrorKind.UNKNOWN]

    def test_deadline_exceeded_is_network(self) -> None:
        error = error_for_failure(describe_deadline_exceeded(0.5), "fetching issues")

        assert error.kind is ErrorKind.NETWORK
        assert error.message.endswith("(Request did not complete within 0.5s)")
        assert format_error_message(error) == ERROR_MESSAGES[ErrorKind.NETWORK]
