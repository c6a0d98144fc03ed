import json
import logging
from typing import Optional

import redis.asyncio as aioredis

from pokecache.models import Pokemon

logger = logging.getLogger(__name__)


class PokemonCache:
    """
    Redis-backed store for mapped Pokemon, keyed by id plus one sentinel key for the full list.
    Entries never expire unless a TTL is given; SET is atomic so concurrent writers simply overwrite.
    """
    KEY_PREFIX = "pokemon"
    ALL_KEY = f"{KEY_PREFIX}:all"

    def __init__(self, redis_url: str = "redis://localhost:6379", ttl: Optional[int] = None):
        self.redis = aioredis.from_url(redis_url, decode_responses=True)
        self.ttl = ttl

    @classmethod
    def key_for(cls, pokemon_id: int) -> str:
        return f"{cls.KEY_PREFIX}:{pokemon_id}"

    async def _store(self, key: str, value: str):
        if self.ttl:
            await self.redis.setex(key, self.ttl, value)
        else:
            await self.redis.set(key, value)

    async def get(self, pokemon_id: int) -> Optional[Pokemon]:
        cached_data = await self.redis.get(self.key_for(pokemon_id))
        if cached_data is None:
            return None
        return Pokemon.model_validate_json(cached_data)

    async def set(self, pokemon: Pokemon):
        await self._store(self.key_for(pokemon.id), pokemon.model_dump_json())

    async def get_all(self) -> Optional[list[Pokemon]]:
        cached_data = await self.redis.get(self.ALL_KEY)
        if cached_data is None:
            return None
        return [Pokemon.model_validate(item) for item in json.loads(cached_data)]

    async def set_all(self, pokemon_list: list[Pokemon]):
        await self._store(self.ALL_KEY, json.dumps([p.model_dump() for p in pokemon_list]))

    async def clear(self):
        """Drop every cached Pokemon. Useful for testing."""
        keys = await self.redis.keys(f"{self.KEY_PREFIX}:*")
        if keys:
            await self.redis.delete(*keys)
            logger.info(f"Cleared {len(keys)} cached Pokemon entries")

    async def close(self):
        """Close Redis connection (call on shutdown)."""
        await self.redis.aclose()
