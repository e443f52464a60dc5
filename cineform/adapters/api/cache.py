"""
Cache disque des reponses TMDB (diskcache), avec TTL par nature d'appel.

- Recherches : 24 heures
- Details et tables de genres : 7 jours
- Decouverte (episodes a venir) : 6 heures, le prochain episode change souvent
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone : les acces disque passent par run_in_executor.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_search("tmdb:search:pt-BR:naruto", results)
        results = await cache.get("tmdb:search:pt-BR:naruto")
    """

    SEARCH_TTL = 24 * 60 * 60
    DETAILS_TTL = 7 * 24 * 60 * 60
    DISCOVER_TTL = 6 * 60 * 60

    def __init__(self, cache_dir: str | Path = ".cache/api") -> None:
        self._cache = Cache(cache_dir)

    async def get(self, key: str) -> Optional[Any]:
        """Retourne la valeur en cache, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        await self.set(key, value, self.SEARCH_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        await self.set(key, value, self.DETAILS_TTL)

    async def set_discover(self, key: str, value: Any) -> None:
        await self.set(key, value, self.DISCOVER_TTL)

    async def clear(self) -> None:
        """Vide le cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        self._cache.close()
