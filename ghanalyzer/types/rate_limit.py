"""Rate-limit data models."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class RateLimitInfo:
    """Documented quota ceiling for the current credential mode."""

    has_credential: bool
    limit: int
    label: str  # "authenticated" or "anonymous"


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Quota state read from the most recent successful response."""

    remaining: int | None
    limit: int | None
    reset: int | None  # epoch seconds

    @property
    def reset_at(self) -> datetime | None:
        """Reset time as an aware UTC datetime."""
        if self.reset is None:
            return None
        try:
            return datetime.fromtimestamp(self.reset, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
