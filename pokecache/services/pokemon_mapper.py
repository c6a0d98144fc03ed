"""Normalization of raw PokeAPI records into the Pokemon model served from the cache."""
from pydantic import ValidationError

from pokecache.errors import MappingError
from pokecache.models import (
    PokeAPIPokemon,
    PokeAPISprites,
    PokeAPIType,
    Pokemon,
    PokemonSprites,
    PokemonStat,
)

# Inclusive upper id bound of each region, in National Dex order
REGION_BOUNDS = [
    (151, "Kanto"),
    (251, "Johto"),
    (386, "Hoenn"),
    (493, "Sinnoh"),
    (649, "Unova"),
    (721, "Kalos"),
    (809, "Alola"),
    (905, "Galar"),
]
LATEST_REGION = "Paldea"

ALL_TYPES = [
    "Normal", "Fighting", "Flying", "Poison", "Ground", "Rock",
    "Bug", "Ghost", "Steel", "Fire", "Water", "Grass", "Electric",
    "Psychic", "Ice", "Dragon", "Dark", "Fairy",
]


def capitalize_name(name: str) -> str:
    # Only the first letter changes; "mr-mime" -> "Mr-mime"
    return name[:1].upper() + name[1:]


def determine_region(pokemon_id: int) -> str:
    for upper_bound, region in REGION_BOUNDS:
        if pokemon_id <= upper_bound:
            return region
    return LATEST_REGION


def calculate_weaknesses(types: list[PokeAPIType]) -> list[str]:
    """
    Simplified weakness calculation: every type is listed, whatever the Pokemon's own types.
    A real implementation needs the type effectiveness matrix from /type/{name}.
    """
    return list(ALL_TYPES)


def to_pokemon(raw: dict) -> Pokemon:
    """Maps a raw /pokemon/{id} payload to a Pokemon. Raises MappingError on malformed input."""
    raw_id = raw.get("id") if isinstance(raw, dict) else None
    try:
        record = PokeAPIPokemon.model_validate(raw)
    except ValidationError as e:
        raise MappingError(str(e), pokemon_id=raw_id if isinstance(raw_id, int) else None) from e

    # Official artwork lives two levels down and is often missing for alternate forms
    sprites = record.sprites or PokeAPISprites()
    artwork = sprites.other.official_artwork if sprites.other else None

    return Pokemon(
        id=record.id,
        name=capitalize_name(record.name),
        types=[t.type.name for t in record.types],
        region=determine_region(record.id),
        weaknesses=calculate_weaknesses(record.types),
        sprites=PokemonSprites(
            front_default=sprites.front_default,
            back_default=sprites.back_default,
            official_artwork=artwork.front_default if artwork else None,
        ),
        height=record.height,
        weight=record.weight,
        stats=[PokemonStat(name=s.stat.name, base_stat=s.base_stat) for s in record.stats],
    )
