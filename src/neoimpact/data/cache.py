"""Date-keyed cache for fetched NEO feed payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _today_key(today: date | datetime | str | None) -> str:
    if today is None:
        return datetime.now(timezone.utc).date().isoformat()
    if isinstance(today, datetime):
        if today.tzinfo is not None:
            today = today.astimezone(timezone.utc)
        return today.date().isoformat()
    if isinstance(today, date):
        return today.isoformat()
    return today


@dataclass
class FeedCache(Generic[T]):
    """Holds a single payload valid for one UTC calendar day.

    A lookup on any other day is a miss. The cache is an ordinary object owned
    by whoever fetches the feed; there is no module-level instance.

    Example::

        cache = FeedCache()
        feed = cache.get()
        if feed is None:
            feed = parse_feed(fetch_feed())
            cache.put(feed)
    """

    _date: str | None = field(default=None, repr=False)
    _payload: T | None = field(default=None, repr=False)

    def get(self, today: date | datetime | str | None = None) -> T | None:
        """Cached payload for ``today`` (default: current UTC date), or None."""
        key = _today_key(today)
        if self._date is None or self._date != key:
            logger.debug("Feed cache miss for %s (cached: %s)", key, self._date)
            return None
        logger.debug("Feed cache hit for %s", key)
        return self._payload

    def put(self, payload: T, today: date | datetime | str | None = None) -> None:
        """Store ``payload`` as the feed for ``today``, replacing any older entry."""
        self._date = _today_key(today)
        self._payload = payload

    def invalidate(self) -> None:
        self._date = None
        self._payload = None

    @property
    def cached_on(self) -> str | None:
        """ISO date of the cached payload, if any."""
        return self._date
