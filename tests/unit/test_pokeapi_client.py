import pytest
import httpx
from pokecache.clients.pokeapi_client import PokeAPIClient, extract_pokemon_id
from pokecache.config import Settings
from pokecache.errors import FetchError, ParseError
from pokecache.models import PokemonReference


MOCK_POKEMON_LIST = {
    "count": 1302,
    "next": "https://pokeapi.co/api/v2/pokemon?offset=3&limit=3",
    "previous": None,
    "results": [
        {"name": "bulbasaur", "url": "https://pokeapi.co/api/v2/pokemon/1/"},
        {"name": "ivysaur", "url": "https://pokeapi.co/api/v2/pokemon/2/"},
        {"name": "venusaur", "url": "https://pokeapi.co/api/v2/pokemon/3/"},
    ]
}

@pytest.fixture
def poke_client():
    """Provides a PokeAPIClient with a small max_pokemon ceiling."""
    return PokeAPIClient(Settings(max_pokemon=3))

@pytest.mark.asyncio
async def test_fetch_by_id_returns_raw_record(httpx_mock, poke_client, make_raw_pokemon):
    """Verifies the client returns the JSON object untouched."""
    # ARRANGE: Mock the external API call
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/1",
        json=make_raw_pokemon(1),
        status_code=200
    )

    # ACT
    result = await poke_client.fetch_by_id(1)

    # ASSERT
    assert result["id"] == 1
    assert result["name"] == "bulbasaur"

@pytest.mark.asyncio
async def test_not_found_raises_fetch_error_with_status(httpx_mock, poke_client):
    """A 404 from PokeAPI becomes a FetchError that remembers the status and the id."""
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/99999",
        status_code=404
    )

    with pytest.raises(FetchError) as excinfo:
        await poke_client.fetch_by_id(99999)

    assert excinfo.value.status_code == 404
    assert excinfo.value.is_not_found
    assert excinfo.value.target == 99999

@pytest.mark.asyncio
async def test_internal_error_raises_fetch_error(httpx_mock, poke_client):
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/1",
        status_code=500
    )

    with pytest.raises(FetchError) as excinfo:
        await poke_client.fetch_by_id(1)

    assert excinfo.value.status_code == 500
    assert not excinfo.value.is_not_found
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)

@pytest.mark.asyncio
async def test_network_error_raises_fetch_error(httpx_mock, poke_client):
    """Network failures (timeout, DNS error) have no status code but keep the cause."""
    httpx_mock.add_exception(
        httpx.ConnectError("Connection refused."),
        url="https://pokeapi.co/api/v2/pokemon/1"
    )

    with pytest.raises(FetchError) as excinfo:
        await poke_client.fetch_by_id(1)

    assert excinfo.value.status_code is None
    assert "network error" in excinfo.value.detail.lower()
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

@pytest.mark.asyncio
async def test_malformed_body_raises_fetch_error(httpx_mock, poke_client):
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/1",
        text="<html>Bad gateway</html>",
        status_code=200
    )

    with pytest.raises(FetchError) as excinfo:
        await poke_client.fetch_by_id(1)

    assert "not valid JSON" in excinfo.value.detail

@pytest.mark.asyncio
async def test_json_array_body_raises_fetch_error(httpx_mock, poke_client):
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/1",
        json=[1, 2, 3],
        status_code=200
    )

    with pytest.raises(FetchError):
        await poke_client.fetch_by_id(1)

@pytest.mark.asyncio
async def test_fetch_by_id_rejects_non_positive_ids(poke_client):
    with pytest.raises(ValueError):
        await poke_client.fetch_by_id(0)

@pytest.mark.asyncio
async def test_fetch_list_is_capped_at_max_pokemon(httpx_mock, poke_client):
    """Asking for more than max_pokemon only requests max_pokemon references."""
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon?limit=3",
        json=MOCK_POKEMON_LIST,
        status_code=200
    )

    references = await poke_client.fetch_list(limit=500)

    assert references == [
        PokemonReference(name="bulbasaur", url="https://pokeapi.co/api/v2/pokemon/1/"),
        PokemonReference(name="ivysaur", url="https://pokeapi.co/api/v2/pokemon/2/"),
        PokemonReference(name="venusaur", url="https://pokeapi.co/api/v2/pokemon/3/"),
    ]

@pytest.mark.asyncio
async def test_fetch_list_without_results_is_empty(httpx_mock, poke_client):
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon?limit=2",
        json={"count": 0},
        status_code=200
    )

    assert await poke_client.fetch_list(limit=2) == []

@pytest.mark.asyncio
async def test_fetch_list_rejects_non_positive_limit(poke_client):
    with pytest.raises(ValueError):
        await poke_client.fetch_list(limit=0)

# --- REFERENCE URL PARSING ---

@pytest.mark.parametrize("url, expected", [
    ("https://x/pokemon/37/", 37),
    ("https://pokeapi.co/api/v2/pokemon/1025", 1025),
    ("https://pokeapi.co/api/v2/pokemon/10001//", 10001),
])
def test_extract_pokemon_id(url, expected):
    assert extract_pokemon_id(url) == expected

@pytest.mark.parametrize("url", [
    "https://x/pokemon/pikachu/",
    "https://x/pokemon/0/",
    "https://x/pokemon/-4/",
    "",
    "///",
])
def test_extract_pokemon_id_rejects_malformed_urls(url):
    with pytest.raises(ParseError) as excinfo:
        extract_pokemon_id(url)

    assert excinfo.value.url == url
