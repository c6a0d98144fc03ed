from pokecache.cache import PokemonCache
from pokecache.clients import PokeAPIClient
from pokecache.config import get_settings
from pokecache.services import CacheWarmer, PokemonService

_poke_client = None
_cache = None
_pokemon_service = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient(get_settings())
    return _poke_client

def get_cache() -> PokemonCache:
    global _cache
    if _cache is None:
        settings = get_settings()
        _cache = PokemonCache(settings.redis_url, ttl=settings.cache_ttl)
    return _cache

def get_pokemon_service() -> PokemonService:
    global _pokemon_service
    if _pokemon_service is None:
        _pokemon_service = PokemonService(
            poke_client=get_poke_client(),
            cache=get_cache(),
            max_concurrent_requests=get_settings().max_concurrent_requests,
        )
    return _pokemon_service

def get_cache_warmer() -> CacheWarmer:
    # Settings are in milliseconds, the warmer works in seconds
    settings = get_settings()
    return CacheWarmer(
        get_pokemon_service(),
        start_id=settings.sync_start_id,
        end_id=settings.sync_end_id,
        initial_delay=settings.sync_initial_delay_ms / 1000,
        interval=settings.sync_fixed_delay_ms / 1000,
        politeness_delay=settings.sync_politeness_delay_ms / 1000,
    )

async def shutdown():
    """Close upstream and Redis connections and forget the singletons."""
    global _poke_client, _cache, _pokemon_service
    if _poke_client is not None:
        await _poke_client.close()
    if _cache is not None:
        await _cache.close()
    _poke_client = _cache = _pokemon_service = None
