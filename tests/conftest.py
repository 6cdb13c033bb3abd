"""Shared fixtures for the ghanalyzer test suite."""

from ghanalyzer.testing.conftest import (  # noqa: F401
    mock_api,
    mock_client,
    sample_commit_activity,
    sample_issues,
    sample_languages,
    sample_pull_requests,
    sample_repository,
)
