"""Rate-limit observation for ghanalyzer.

Purely diagnostic: the observer records and logs quota headers and never
throttles, delays or fails a request.
"""

from collections.abc import Mapping

from ghanalyzer.logging import get_logger
from ghanalyzer.types.rate_limit import RateLimitSnapshot

logger = get_logger("ratelimit")

LOW_WATER_MARK = 100

REMAINING_HEADER = "x-ratelimit-remaining"
LIMIT_HEADER = "x-ratelimit-limit"
RESET_HEADER = "x-ratelimit-reset"


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive; httpx.Headers is not
        value = headers.get(name.title())
    return value


class RateLimitObserver:
    """Keeps the latest rate-limit snapshot seen on successful responses."""

    def __init__(self, low_water_mark: int = LOW_WATER_MARK) -> None:
        """
        Initialize the observer.

        Args:
            low_water_mark: Remaining-quota level below which a warning is logged
        """
        self.low_water_mark = low_water_mark
        self.latest: RateLimitSnapshot | None = None

    def observe(self, headers: Mapping[str, str]) -> RateLimitSnapshot | None:
        """
        Record quota headers from a successful response.

        Args:
            headers: Response headers

        Returns:
            The new snapshot, or None if the response carried no quota headers
        """
        try:
            raw = {
                name: _header(headers, name)
                for name in (REMAINING_HEADER, LIMIT_HEADER, RESET_HEADER)
            }
            if all(value is None for value in raw.values()):
                return None

            snapshot = RateLimitSnapshot(
                remaining=_parse_int(raw[REMAINING_HEADER]),
                limit=_parse_int(raw[LIMIT_HEADER]),
                reset=_parse_int(raw[RESET_HEADER]),
            )
        except Exception:  # noqa: BLE001 - observation must never break a request
            logger.debug("Could not read rate-limit headers", exc_info=True)
            return None

        self.latest = snapshot

        reset_at = snapshot.reset_at
        logger.debug(
            "Rate limit: %s/%s remaining (resets at %s)",
            snapshot.remaining,
            snapshot.limit,
            reset_at.strftime("%H:%M:%S UTC") if reset_at else "unknown",
        )

        if snapshot.remaining is not None and snapshot.remaining < self.low_water_mark:
            logger.warning(
                "Rate limit getting low: %s/%s requests remaining",
                snapshot.remaining,
                snapshot.limit,
            )

        return snapshot
