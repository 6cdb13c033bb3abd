"""Repository URL parsing."""

import re
from dataclasses import dataclass

from ghanalyzer.exceptions import InvalidRepositoryURLError

_URL_PATTERNS = [
    re.compile(r"^https?://(?:www\.)?github\.com/([^/\s]+)/([^/\s]+?)(?:\.git)?(?:/.*)?$"),
    re.compile(r"^(?:www\.)?github\.com/([^/\s]+)/([^/\s]+?)(?:\.git)?(?:/.*)?$"),
    re.compile(r"^([^/\s:]+)/([^/\s]+?)(?:\.git)?$"),
]


@dataclass(frozen=True)
class RepositoryRef:
    """An owner/name pair identifying a repository."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


def parse_repository_url(url: str) -> RepositoryRef:
    """
    Extract owner and repository name from a GitHub URL.

    Accepts ``https://github.com/owner/repo`` (optionally with ``.git`` or a
    trailing path such as ``/tree/main``), ``github.com/owner/repo`` and the
    bare ``owner/repo`` form.

    Raises:
        InvalidRepositoryURLError: If the URL does not name a repository
    """
    candidate = (url or "").strip().rstrip("/")
    for pattern in _URL_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return RepositoryRef(owner=match.group(1), repo=match.group(2))
    raise InvalidRepositoryURLError(url)


def is_valid_repository_url(url: str) -> bool:
    """Return True if ``parse_repository_url`` would accept url."""
    try:
        parse_repository_url(url)
    except InvalidRepositoryURLError:
        return False
    return True
