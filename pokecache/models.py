from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Raw PokeAPI payloads (Internal Contract) ---
# Only the fields we map are declared; pydantic ignores the rest of the payload.

class NamedResource(BaseModel):
    name: str

class PokeAPIType(BaseModel):
    slot: Optional[int] = None
    type: NamedResource

class PokeAPIStat(BaseModel):
    base_stat: int
    stat: NamedResource

class PokeAPIArtwork(BaseModel):
    front_default: Optional[str] = None

class PokeAPIOtherSprites(BaseModel):
    # JSON key contains a dash, so it needs an alias
    official_artwork: Optional[PokeAPIArtwork] = Field(default=None, alias="official-artwork")

class PokeAPISprites(BaseModel):
    front_default: Optional[str] = None
    back_default: Optional[str] = None
    other: Optional[PokeAPIOtherSprites] = None

class PokeAPIPokemon(BaseModel):
    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    types: list[PokeAPIType]
    sprites: Optional[PokeAPISprites] = None
    stats: list[PokeAPIStat]
    height: int
    weight: int

class PokemonReference(BaseModel):
    """Entry of the /pokemon list endpoint: a name and the url of the full record."""
    name: str
    url: str


# --- Normalized model served from the cache (Public Contract) ---

class PokemonSprites(BaseModel):
    model_config = ConfigDict(frozen=True)

    front_default: Optional[str] = None
    back_default: Optional[str] = None
    official_artwork: Optional[str] = None

class PokemonStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    base_stat: int

class Pokemon(BaseModel):
    # Built once by the mapper and never mutated afterwards
    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    types: list[str]
    region: str
    weaknesses: list[str]
    sprites: PokemonSprites
    height: int
    weight: int
    stats: list[PokemonStat]
