"""ghanalyzer testing utilities.

Provides a mock GitHub API and payload factories for testing applications
that use ghanalyzer.
"""

from ghanalyzer.testing.fixtures import (
    create_mock_commit,
    create_mock_commit_week,
    create_mock_contributor,
    create_mock_issue,
    create_mock_pull_request,
    create_mock_repository,
)
from ghanalyzer.testing.mock import MockCall, MockGitHubAPI, MockResponse

__all__ = [
    # Mock API
    "MockGitHubAPI",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_repository",
    "create_mock_issue",
    "create_mock_pull_request",
    "create_mock_contributor",
    "create_mock_commit",
    "create_mock_commit_week",
]
