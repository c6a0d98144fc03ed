"""Error taxonomy shared by the client, the mapper and the service layer."""
from typing import Optional, Union


class PokeCacheError(Exception):
    """Base class for every error raised by this package."""


class FetchError(PokeCacheError):
    """The upstream request failed: network error, non-2xx status or unreadable body."""

    def __init__(self, target: Union[int, str], detail: str, status_code: Optional[int] = None):
        self.target = target
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"Failed to fetch {target}: {detail}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class MappingError(PokeCacheError):
    """The upstream payload does not have the shape of a Pokemon record."""

    def __init__(self, detail: str, pokemon_id: Optional[int] = None):
        self.detail = detail
        self.pokemon_id = pokemon_id
        prefix = f"Pokemon {pokemon_id}" if pokemon_id is not None else "Pokemon record"
        super().__init__(f"{prefix} could not be mapped: {detail}")


class ParseError(PokeCacheError):
    """A reference url does not end in a numeric Pokemon id."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No Pokemon id found in url '{url}'")
