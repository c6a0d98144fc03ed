"""Runs the cache warmer as a standalone process: `python -m pokecache`."""
import asyncio
import logging
import sys

from pokecache.config import get_settings
from pokecache.dependencies import get_cache_warmer, shutdown

logger = logging.getLogger("pokecache")


async def main() -> None:
    warmer = get_cache_warmer()
    task = warmer.start()
    try:
        await task
    finally:
        await warmer.stop()
        await shutdown()


if __name__ == "__main__":
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Cache warmer stopped by user (Ctrl+C)")
