import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from pokecache.cache import PokemonCache
from pokecache.clients.pokeapi_client import PokeAPIClient, extract_pokemon_id
from pokecache.errors import ParseError
from pokecache.models import Pokemon
from pokecache.services.pokemon_mapper import to_pokemon

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PokemonService:
    """Read-through access to Pokemon: cache first, PokeAPI + mapper on a miss."""

    def __init__(self, poke_client: PokeAPIClient, cache: PokemonCache, max_concurrent_requests: int = 20):
        self._poke_client = poke_client
        self._cache = cache
        self._max_concurrent_requests = max_concurrent_requests
        # In-flight fetches by cache key, so concurrent misses share one upstream call
        self._pending: dict[str, asyncio.Task] = {}

    async def _single_flight(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(fetch())
            self._pending[key] = task

            def _forget(done: asyncio.Task, key: str = key):
                if self._pending.get(key) is done:
                    del self._pending[key]

            task.add_done_callback(_forget)
        else:
            logger.debug(f"Joining in-flight request for {key}")
        # A cancelled caller must not cancel the fetch other callers are waiting on
        return await asyncio.shield(task)

    async def get_by_id(self, pokemon_id: int) -> Pokemon:
        """
        Returns the Pokemon with this id. Fetch and mapping errors propagate to the caller
        and nothing is cached for a failed id.
        """
        cached = await self._cache.get(pokemon_id)
        if cached is not None:
            logger.debug(f"Cache hit for Pokemon ID: {pokemon_id}")
            return cached

        logger.info(f"Cache miss for Pokemon ID: {pokemon_id}")
        return await self._single_flight(PokemonCache.key_for(pokemon_id), lambda: self._load(pokemon_id))

    async def _load(self, pokemon_id: int) -> Pokemon:
        raw = await self._poke_client.fetch_by_id(pokemon_id)
        pokemon = to_pokemon(raw)
        await self._cache.set(pokemon)
        return pokemon

    async def get_all(self) -> list[Pokemon]:
        """
        Returns every Pokemon up to the configured maximum, ordered by id.
        Individual failures are logged and left out of the result.
        """
        cached = await self._cache.get_all()
        if cached is not None:
            logger.debug("Cache hit for the full Pokemon list")
            return cached

        logger.info("Cache miss for the full Pokemon list, fetching all Pokemon from PokeAPI")
        return await self._single_flight(PokemonCache.ALL_KEY, self._load_all)

    async def _load_all(self) -> list[Pokemon]:
        references = await self._poke_client.fetch_list()

        pokemon_ids = []
        for reference in references:
            try:
                pokemon_ids.append(extract_pokemon_id(reference.url))
            except ParseError as e:
                logger.warning(f"Skipping reference '{reference.name}': {e}")

        semaphore = asyncio.Semaphore(self._max_concurrent_requests)

        async def fetch_one(pokemon_id: int) -> Optional[Pokemon]:
            async with semaphore:
                try:
                    return await self.get_by_id(pokemon_id)
                except Exception as e:
                    logger.warning(f"Failed to fetch Pokemon ID {pokemon_id}: {e}")
                    return None

        # Completion order is arbitrary; sort so callers always see National Dex order
        results = await asyncio.gather(*(fetch_one(pokemon_id) for pokemon_id in pokemon_ids))
        pokemon_list = sorted((p for p in results if p is not None), key=lambda p: p.id)

        if pokemon_list:
            await self._cache.set_all(pokemon_list)
        else:
            logger.warning("No Pokemon could be fetched, the full list is not cached")
        logger.info(f"Fetched {len(pokemon_list)} of {len(pokemon_ids)} Pokemon")
        return pokemon_list

    async def get_batch(self, offset: int, limit: int) -> list[Pokemon]:
        """Best-effort fetch of ids offset+1..offset+limit; failed ids are skipped, never raised."""
        if offset < 0 or limit < 0:
            raise ValueError(f"offset and limit must be non-negative, got offset={offset}, limit={limit}")

        batch = []
        for pokemon_id in range(offset + 1, offset + limit + 1):
            try:
                batch.append(await self.get_by_id(pokemon_id))
            except Exception as e:
                logger.warning(f"Failed to fetch Pokemon ID {pokemon_id}: {e}")
        return batch
