"""Process-local TTL cache for generated invitation text.

The database is the source of truth; a miss here is always safe. Entries are
not shared between server instances.
"""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


def cache_key(guest_id: object) -> str:
    """Cache key for a guest's invitation text."""
    return f"invitation:{guest_id}"


class InvitationCache:
    """Key → text store whose entries expire ``ttl_seconds`` after their last write."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, key: str) -> str | None:
        """Return the cached text, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        text, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return text

    def set(self, key: str, text: str) -> None:
        """Store ``text`` under ``key``, restarting its TTL."""
        self.purge_expired()
        self._entries[key] = (text, self._clock() + self.ttl_seconds)

    def invalidate(self, key: str) -> None:
        """Drop ``key`` if present."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def purge_expired(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %d expired invitation cache entries", len(expired))
        return len(expired)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        self.purge_expired()
        return len(self._entries)
