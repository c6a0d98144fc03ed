from .cache_warmer import CacheWarmer
from .pokemon_service import PokemonService

__all__ = [
    'CacheWarmer',
    'PokemonService',
]
