import asyncio
import logging
from typing import Optional

from pokecache.services.pokemon_service import PokemonService

logger = logging.getLogger(__name__)


class CacheWarmer:
    """
    Periodically preloads a fixed id range into the cache.

    The loop waits `initial_delay` seconds, runs one pass, then waits `interval` seconds
    after each completed pass. Calls are spaced by `politeness_delay` to go easy on PokeAPI.
    """

    def __init__(
        self,
        service: PokemonService,
        start_id: int = 1,
        end_id: int = 50,
        initial_delay: float = 5.0,
        interval: float = 3600.0,
        politeness_delay: float = 0.1,
    ):
        if start_id <= 0 or end_id < start_id:
            raise ValueError(f"Invalid warm range {start_id}..{end_id}")
        self._service = service
        self.start_id = start_id
        self.end_id = end_id
        self.initial_delay = initial_delay
        self.interval = interval
        self.politeness_delay = politeness_delay
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Runs a single warming pass and returns how many Pokemon were preloaded."""
        logger.info("Starting Pokemon cache preloading...")
        warmed = 0
        try:
            for pokemon_id in range(self.start_id, self.end_id + 1):
                try:
                    pokemon = await self._service.get_by_id(pokemon_id)
                    warmed += 1
                    logger.debug(f"Preloaded Pokemon: {pokemon.id} - {pokemon.name}")
                except Exception as e:
                    logger.warning(f"Failed to preload Pokemon ID {pokemon_id}: {e}")
                await asyncio.sleep(self.politeness_delay)
            logger.info(f"Pokemon cache preloading completed ({warmed}/{self.end_id - self.start_id + 1})")
        except Exception:
            logger.exception("Error during cache preloading")
        return warmed

    async def _run_forever(self):
        await asyncio.sleep(self.initial_delay)
        while True:
            await self.run_once()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        """Schedules the warming loop on the running event loop."""
        if self.is_running:
            return self._task
        self._task = asyncio.create_task(self._run_forever())
        logger.info(
            f"Cache warmer scheduled for IDs {self.start_id}-{self.end_id} "
            f"(initial delay {self.initial_delay}s, every {self.interval}s)"
        )
        return self._task

    async def stop(self):
        """Cancels the warming loop and waits for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Cache warmer stopped")
