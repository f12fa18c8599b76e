"""
In-memory caching for chat-bot responses.

Cache Configuration:
- 30-second TTL by default so a burst of identical commands costs one API round
- Cache key is "command" or "command:nickname" (nickname lowercased)
- Uses monotonic() for TTL comparison (immune to system clock changes)
- Bounded LRU: nicknames come straight from the query string
"""

from collections import OrderedDict
from time import monotonic
from typing import Awaitable, Callable, Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


def cache_key(command: str, nickname: Optional[str] = None) -> str:
    nick = (nickname or "").strip().lower()
    return f"{command}:{nick}" if nick else command


class TTLCache(Generic[V]):
    def __init__(
        self,
        ttl_seconds: float,
        maxsize: int = 512,
        clock: Callable[[], float] = monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.maxsize = maxsize
        self._clock = clock
        # key -> (timestamp_monotonic, value)
        self._store: "OrderedDict[Hashable, tuple[float, V]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def get(self, key: Hashable) -> Optional[V]:
        """
        Retrieve a cached value if it exists and is within TTL.

        Returns:
            The value on a hit, None on a miss or when expired
        """
        cached = self._store.get(key)
        if cached is None:
            return None

        if self._clock() - cached[0] < self.ttl_seconds:
            self._store.move_to_end(key)
            return cached[1]

        del self._store[key]
        return None

    def set(self, key: Hashable, value: V) -> None:
        """Store value with the current timestamp, evicting the oldest keys."""
        self._store[key] = (self._clock(), value)
        self._store.move_to_end(key)
        while len(self._store) > self.maxsize:
            self._store.popitem(last=False)

    def clear(self, key: Optional[Hashable] = None) -> None:
        """Clear one key, or everything when no key is given."""
        if key is None:
            self._store.clear()
        else:
            self._store.pop(key, None)


async def get_or_render(
    cache: TTLCache[str], key: Hashable, render: Callable[[], Awaitable[str]]
) -> str:
    """Cached text for key, or render it and cache it. Errors are never cached."""
    cached = cache.get(key)
    if cached is not None:
        return cached

    text = await render()
    cache.set(key, text)
    return text
