"""
Pytest fixtures and payload factories for ghanalyzer testing.

The factories build realistic (trimmed) GitHub REST payloads.
"""

from collections.abc import Generator
from typing import Any

import pytest

from ghanalyzer.client import GitHubAnalyzerClient
from ghanalyzer.storage import MemoryStorage
from ghanalyzer.testing.mock import MockGitHubAPI


def _user(login: str, user_id: int = 1) -> dict[str, Any]:
    return {
        "login": login,
        "id": user_id,
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}?v=4",
        "html_url": f"https://github.com/{login}",
        "type": "User",
        "site_admin": False,
    }


# ============================================================================
# Helper Functions for Creating Test Data
# ============================================================================


def create_mock_repository(
    owner: str = "octocat",
    name: str = "Hello-World",
    repo_id: int = 1296269,
    **overrides: Any,
) -> dict[str, Any]:
    """Create a ``GET /repos/{owner}/{repo}`` payload."""
    data: dict[str, Any] = {
        "id": repo_id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": _user(owner),
        "private": False,
        "html_url": f"https://github.com/{owner}/{name}",
        "description": "This your first repo!",
        "fork": False,
        "languages_url": f"https://api.github.com/repos/{owner}/{name}/languages",
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2011-01-26T19:14:43Z",
        "pushed_at": "2011-01-26T19:06:43Z",
        "size": 108,
        "stargazers_count": 80,
        "watchers_count": 80,
        "language": "C",
        "has_issues": True,
        "has_projects": True,
        "has_wiki": True,
        "has_pages": False,
        "forks_count": 9,
        "archived": False,
        "disabled": False,
        "open_issues_count": 0,
        "license": {"key": "mit", "name": "MIT License"},
        "topics": ["octocat", "atom", "electron", "api"],
        "default_branch": "master",
    }
    data.update(overrides)
    return data


def create_mock_issue(
    number: int = 1,
    state: str = "open",
    created_at: str = "2024-01-01T00:00:00Z",
    closed_at: str | None = None,
    login: str = "octocat",
    labels: list[str] | None = None,
    is_pull_request: bool = False,
) -> dict[str, Any]:
    """Create one entry of a ``GET .../issues`` listing."""
    issue: dict[str, Any] = {
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "state": state,
        "user": _user(login),
        "labels": [{"name": label} for label in labels or []],
        "created_at": created_at,
        "closed_at": closed_at,
    }
    if is_pull_request:
        issue["pull_request"] = {
            "url": f"https://api.github.com/repos/octocat/Hello-World/pulls/{number}"
        }
    return issue


def create_mock_pull_request(
    number: int = 1, state: str = "open", login: str = "octocat"
) -> dict[str, Any]:
    """Create one entry of a ``GET .../pulls`` listing."""
    return {
        "id": 2000 + number,
        "number": number,
        "title": f"Pull request {number}",
        "state": state,
        "user": _user(login),
        "created_at": "2024-01-01T00:00:00Z",
        "merged_at": None,
    }


def create_mock_contributor(
    login: str = "octocat", contributions: int = 32, user_id: int = 1
) -> dict[str, Any]:
    """Create one entry of a ``GET .../contributors`` listing."""
    return {**_user(login, user_id), "contributions": contributions}


def create_mock_commit(
    sha: str = "6dcb09b5b57875f334f61aebed695e2e4193db5e",
    date: str = "2024-01-15T12:00:00Z",
    author: str = "Monalisa Octocat",
) -> dict[str, Any]:
    """Create one entry of a ``GET .../commits`` listing."""
    return {
        "sha": sha,
        "commit": {
            "author": {"name": author, "email": "support@github.com", "date": date},
            "message": "Fix all the bugs",
        },
    }


def create_mock_commit_week(week: int = 1_704_585_600, days: list[int] | None = None) -> dict[str, Any]:
    """Create one entry of ``GET .../stats/commit_activity``."""
    days = days if days is not None else [0, 3, 26, 20, 39, 1, 0]
    return {"days": days, "total": sum(days), "week": week}


# ============================================================================
# Mock API Fixtures
# ============================================================================


@pytest.fixture
def mock_api() -> MockGitHubAPI:
    """Provide an empty MockGitHubAPI."""
    return MockGitHubAPI()


@pytest.fixture
def mock_client(mock_api: MockGitHubAPI) -> Generator[GitHubAnalyzerClient, None, None]:
    """
    Provide an anonymous GitHubAnalyzerClient wired to ``mock_api``.

    Example:
        ```python
        def test_my_feature(mock_api, mock_client):
            mock_api.add("/repos/octocat/Hello-World/languages", json={"C": 100})
            assert mock_client.repos.get_languages("octocat", "Hello-World") == {"C": 100}
        ```
    """
    client = mock_api.client(storage=MemoryStorage())
    yield client
    client.close()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_repository() -> dict[str, Any]:
    return create_mock_repository()


@pytest.fixture
def sample_languages() -> dict[str, int]:
    return {"Python": 7000, "C": 2000, "Shell": 1000}


@pytest.fixture
def sample_issues() -> list[dict[str, Any]]:
    """Two open issues, one closed issue and one pull request."""
    return [
        create_mock_issue(1, "open", labels=["bug"]),
        create_mock_issue(2, "open", login="hubot", labels=["bug", "help wanted"]),
        create_mock_issue(
            3, "closed",
            created_at="2024-01-01T00:00:00Z",
            closed_at="2024-01-05T00:00:00Z",
        ),
        create_mock_issue(4, "open", is_pull_request=True),
    ]


@pytest.fixture
def sample_pull_requests() -> list[dict[str, Any]]:
    return [
        create_mock_pull_request(4, "open"),
        create_mock_pull_request(5, "closed"),
        create_mock_pull_request(6, "closed"),
    ]


@pytest.fixture
def sample_commit_activity() -> list[dict[str, Any]]:
    return [
        create_mock_commit_week(1_704_585_600, [0, 1, 2, 0, 0, 0, 0]),
        create_mock_commit_week(1_705_190_400, [1, 1, 1, 1, 1, 0, 0]),
    ]
