"""Process-wide store of literal-string tuples keyed by call site."""

import logging
import threading
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class TemplateCache:
    """Maps call-site tokens to the strings tuple first produced for them.

    Entries are never evicted or replaced. Reads take no lock; inserts are
    insert-if-absent under a lock, so concurrent first renders of the same
    call site agree on a single tuple.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> Optional[Tuple[str, ...]]:
        return self._entries.get(token)

    def put(self, token: str, strings: Tuple[str, ...]) -> Tuple[str, ...]:
        """Store ``strings`` unless the token is known; return the cached tuple."""
        cached = self._entries.get(token)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._entries.get(token)
            if cached is None:
                cached = self._entries[token] = tuple(strings)
                logger.debug("Cached %d strings for %s", len(cached), token)
        return cached

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Global instance used by the default compiler
_cache_instance = TemplateCache()


def get_cache() -> TemplateCache:
    """Get global template cache."""
    return _cache_instance
