"""Search history and bookmarks persisted in a ``Storage`` backend."""

import time
from typing import Any, TypeVar

from ghanalyzer.logging import get_logger
from ghanalyzer.storage import Storage
from ghanalyzer.types.history import Bookmark, HistoryEntry
from ghanalyzer.types.records import RepositoryRecord

SEARCH_HISTORY_KEY = "github_analyzer_search_history"
BOOKMARKS_KEY = "github_analyzer_bookmarks"

MAX_HISTORY_ITEMS = 20

T = TypeVar("T")

logger = get_logger("history")


def _now_ms() -> int:
    return int(time.time() * 1000)


def _build_entries(items: list[Any], model: type[T], key: str) -> list[T]:
    entries = []
    for item in items:
        try:
            entries.append(model(**item))
        except TypeError as e:
            logger.warning("Skipping malformed %s item: %s", key, e)
    return entries


class SearchHistory:
    """Most recently analysed repositories, newest first, one entry per repository."""

    def __init__(
        self,
        storage: Storage,
        key: str = SEARCH_HISTORY_KEY,
        max_items: int = MAX_HISTORY_ITEMS,
    ) -> None:
        self.storage = storage
        self.key = key
        self.max_items = max_items

    def _load(self) -> list[dict[str, Any]]:
        items = self.storage.get(self.key, [])
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def entries(self) -> list[HistoryEntry]:
        return _build_entries(self._load(), HistoryEntry, self.key)

    def add(self, url: str, owner: str, repo: str) -> HistoryEntry:
        """
        Record an analysed repository.

        An existing entry for the same owner/repo is replaced and the new entry
        moves to the front. The list is capped at ``max_items``.
        """
        entry = HistoryEntry(
            url=url,
            owner=owner,
            repo=repo,
            timestamp=_now_ms(),
            display_name=f"{owner}/{repo}",
        )
        others = [
            item for item in self._load()
            if not (item.get("owner") == owner and item.get("repo") == repo)
        ]
        self.storage.set(self.key, [entry.to_dict(), *others][: self.max_items])
        return entry

    def remove(self, owner: str, repo: str) -> None:
        remaining = [
            item for item in self._load()
            if not (item.get("owner") == owner and item.get("repo") == repo)
        ]
        self.storage.set(self.key, remaining)

    def clear(self) -> None:
        self.storage.remove(self.key)


class Bookmarks:
    """Saved repositories, newest first, one entry per repository id."""

    def __init__(self, storage: Storage, key: str = BOOKMARKS_KEY) -> None:
        self.storage = storage
        self.key = key

    def _load(self) -> list[dict[str, Any]]:
        items = self.storage.get(self.key, [])
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def entries(self) -> list[Bookmark]:
        return _build_entries(self._load(), Bookmark, self.key)

    def add(self, repository: RepositoryRecord) -> Bookmark:
        """
        Bookmark a repository from its ``get_repository`` payload.

        Bookmarking the same repository again refreshes it and moves it to the front.
        """
        bookmark = Bookmark(
            id=repository["id"],
            name=repository["name"],
            full_name=repository["full_name"],
            owner=repository["owner"]["login"],
            repo=repository["name"],
            description=repository.get("description"),
            stars=repository.get("stargazers_count", 0),
            language=repository.get("language"),
            url=repository["html_url"],
            timestamp=_now_ms(),
        )
        others = [item for item in self._load() if item.get("id") != bookmark.id]
        self.storage.set(self.key, [bookmark.to_dict(), *others])
        return bookmark

    def remove(self, repo_id: int) -> None:
        self.storage.set(self.key, [item for item in self._load() if item.get("id") != repo_id])

    def is_bookmarked(self, repo_id: int) -> bool:
        return any(item.get("id") == repo_id for item in self._load())

    def clear(self) -> None:
        self.storage.remove(self.key)
