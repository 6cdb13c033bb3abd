"""Search history and bookmark data models."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class HistoryEntry:
    """A previously analysed repository."""

    url: str
    owner: str
    repo: str
    timestamp: int  # epoch milliseconds
    display_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Bookmark:
    """A saved repository."""

    id: int
    name: str
    full_name: str
    owner: str
    repo: str
    description: str | None
    stars: int
    language: str | None
    url: str
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
