import logging
from typing import Optional

import httpx

from pokecache.config import Settings, get_settings
from pokecache.errors import FetchError, ParseError
from pokecache.models import PokemonReference

logger = logging.getLogger(__name__)


def extract_pokemon_id(url: str) -> int:
    """Returns the id at the end of a reference url, e.g. '.../pokemon/37/' -> 37."""
    segments = [segment for segment in url.split("/") if segment]
    if not segments:
        raise ParseError(url)
    try:
        pokemon_id = int(segments[-1])
    except ValueError:
        raise ParseError(url) from None
    if pokemon_id <= 0:
        raise ParseError(url)
    return pokemon_id


class PokeAPIClient:
    """Thin async wrapper around the PokeAPI REST endpoints. No caching, no retries."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.base_url = settings.base_url
        self.max_pokemon = settings.max_pokemon
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.request_timeout,
        )

    async def _get_json(self, url: str, target, params: Optional[dict] = None) -> dict:
        """Performs a GET and maps every failure mode to FetchError."""
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise FetchError(target, f"PokeAPI failed with status {status_code}", status_code=status_code) from e
        except httpx.RequestError as e:
            # Network failures/timeouts
            raise FetchError(target, f"PokeAPI network error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(target, "PokeAPI returned a body that is not valid JSON", response.status_code) from e

        if not isinstance(data, dict):
            raise FetchError(target, f"Expected a JSON object, got {type(data).__name__}", response.status_code)
        return data

    async def fetch_by_id(self, pokemon_id: int) -> dict:
        """Fetches the raw /pokemon/{id} record."""
        if pokemon_id <= 0:
            raise ValueError(f"Pokemon id must be a positive integer, got {pokemon_id}")

        logger.info(f"Fetching Pokemon data from PokeAPI for ID: {pokemon_id}")
        return await self._get_json(f"/pokemon/{pokemon_id}", pokemon_id)

    async def fetch_list(self, limit: Optional[int] = None) -> list[PokemonReference]:
        """Fetches the (name, url) references of the first `limit` Pokemon, capped at max_pokemon."""
        if limit is None:
            limit = self.max_pokemon
        if limit <= 0:
            raise ValueError(f"Limit must be a positive integer, got {limit}")
        limit = min(limit, self.max_pokemon)

        logger.info(f"Fetching Pokemon list from PokeAPI (limit={limit})")
        target = f"/pokemon?limit={limit}"
        data = await self._get_json("/pokemon", target, params={"limit": limit})

        try:
            return [PokemonReference(**entry) for entry in data.get("results") or []]
        except (TypeError, ValueError) as e:
            raise FetchError(target, f"Unexpected list payload: {e}") from e

    async def close(self):
        """Close the underlying HTTP connection pool (call on shutdown)."""
        await self.client.aclose()
