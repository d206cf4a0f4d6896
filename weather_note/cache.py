import json
import logging
import time
from typing import Callable, Optional

from .providers import ProviderRegistry
from .schemas import CachedItem, CacheTable, DataSource

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class WeatherCache:
    """TTL cache holding at most one fetched weather text per provider.

    Parameters
    ----------
    registry : ProviderRegistry
        Used to fetch on a miss.
    table : Optional[CacheTable]
        Backing table. A fresh empty dict when omitted; the owner may pass its
        own to inspect or share it.
    clock : Callable[[], int]
        Current time in milliseconds.

    Notes
    -----
    - Expiration is lazy (on `get`); there is no background reaper, so a stale
      entry stays until its provider is queried again.
    - Concurrent `get` calls for the same provider are not coalesced; each
      fetches and the last one to finish wins.
    - Failed fetches are never cached.
    """

    def __init__(self, registry: ProviderRegistry, table: Optional[CacheTable] = None,
                 clock: Callable[[], int] = now_ms):
        self.registry = registry
        self.table: CacheTable = {} if table is None else table
        self._clock = clock

    async def get(self, provider: DataSource, ttl_seconds: int) -> CachedItem:
        """Return the cached item for `provider` if fresh, otherwise fetch a new one.

        Parameters
        ----------
        provider : DataSource
            Provider to serve.
        ttl_seconds : int
            Freshness window. An item fetched exactly `ttl_seconds` ago is
            still fresh.

        Returns
        -------
        CachedItem
            The stored item (hit) or the newly stored one (miss).

        Raises
        ------
        WeatherError
            Whatever `ProviderRegistry.fetch` raised. The table then holds no
            entry for `provider`.
        """

        now = self._clock()
        item = self.table.get(provider)
        if item is not None:
            if now <= item.fetched_at_ms + ttl_seconds * 1000:
                logger.debug("Cache hit for %s", provider)
                return item
            self.table.pop(provider, None)

        logger.debug("Cache miss for %s", provider)
        text = await self.registry.fetch(provider)
        item = CachedItem(provider=provider, fetched_at_ms=now, text=text)
        self.table[item.provider] = item
        return item

    def is_empty(self) -> bool:
        """Return True if no provider has an entry, fresh or stale."""

        return len(self.table) == 0

    def dump(self) -> str:
        """Render the table as indented JSON, keyed by provider value."""

        data = {p.value: item.model_dump(by_alias=True, mode="json") for p, item in self.table.items()}
        return json.dumps(data, indent=2, ensure_ascii=False)

