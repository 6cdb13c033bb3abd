"""
Pytest plugin for ghanalyzer testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. In your top-level conftest.py:

    pytest_plugins = ["ghanalyzer.testing.conftest"]

Or import the fixtures directly:

    from ghanalyzer.testing.fixtures import mock_api, mock_client
"""

# Re-export all fixtures for pytest auto-discovery
from ghanalyzer.testing.fixtures import (
    mock_api,
    mock_client,
    sample_commit_activity,
    sample_issues,
    sample_languages,
    sample_pull_requests,
    sample_repository,
)

__all__ = [
    "mock_api",
    "mock_client",
    "sample_repository",
    "sample_languages",
    "sample_issues",
    "sample_pull_requests",
    "sample_commit_activity",
]
