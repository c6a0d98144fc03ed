import pytest
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis

from pokecache.cache import PokemonCache


def build_raw_pokemon(pokemon_id: int, name: str = "bulbasaur") -> dict:
    """A trimmed-down /pokemon/{id} payload with the fields the mapper reads."""
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "base_experience": 64,
        "types": [
            {"slot": 1, "type": {"name": "grass", "url": "https://pokeapi.co/api/v2/type/12/"}},
            {"slot": 2, "type": {"name": "poison", "url": "https://pokeapi.co/api/v2/type/4/"}},
        ],
        "sprites": {
            "front_default": f"https://sprites.example/{pokemon_id}.png",
            "back_default": f"https://sprites.example/back/{pokemon_id}.png",
            "other": {
                "official-artwork": {"front_default": f"https://sprites.example/artwork/{pokemon_id}.png"}
            },
        },
        "stats": [
            {"base_stat": 45, "effort": 0, "stat": {"name": "hp"}},
            {"base_stat": 49, "effort": 0, "stat": {"name": "attack"}},
            {"base_stat": 45, "effort": 0, "stat": {"name": "speed"}},
        ],
    }


@pytest.fixture
def make_raw_pokemon():
    return build_raw_pokemon


@pytest.fixture
def redis_client():
    """Provides a fake Redis client with its own in-memory server."""
    return FakeRedis(server=FakeServer(), decode_responses=True)


@pytest.fixture
def cache(redis_client):
    """Provides a PokemonCache backed by fake Redis."""
    cache = PokemonCache()
    cache.redis = redis_client  # Inject fake Redis
    return cache
