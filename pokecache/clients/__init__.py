"""Client modules for external API communication."""
from .pokeapi_client import PokeAPIClient, extract_pokemon_id

__all__ = [
    'PokeAPIClient',
    'extract_pokemon_id',
]
