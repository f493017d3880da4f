"""
Pokedex Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own temporary data file, so tests never touch
       backend/data/pokemon.json and never share state.

Fixture Hierarchy (all function-scoped):
    ├── sample_pokemon: Four stored records with non-contiguous ids (1, 4, 7, 25)
    ├── valid_payload: A creation payload that passes validation
    ├── data_file: Temp JSON file seeded with sample_pokemon
    ├── empty_data_file: Temp JSON file holding []
    ├── store / empty_store: JsonFileStore over those files
    ├── service / empty_service: PokemonService over those stores
    ├── app_settings: Settings pointing at data_file
    └── test_client: HTTPX AsyncClient wired to an app built by create_app
"""

import json
import os
import tempfile

# Override settings for testing BEFORE any app imports
os.environ["DATA_FILE"] = os.path.join(tempfile.mkdtemp(prefix="pokedex_test_"), "pokemon.json")
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app
from app.services.pokemon_service import PokemonService
from app.services.store import JsonFileStore


def write_collection(path, collection):
    path.write_text(json.dumps(collection, indent=2), encoding="utf-8")
    return path


def make_collection(count):
    """`count` minimal records with ids 1..count."""
    return [
        {"id": i, "name": f"Pokemon {i}", "type": ["Normal"]}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def sample_pokemon():
    return [
        {
            "id": 1,
            "name": "Bulbasaur",
            "description": "A strange seed was planted on its back at birth.",
            "characteristics": {
                "height": "0.7 m",
                "weight": "6.9 kg",
                "base_experience": 64,
                "abilities": ["Overgrow", "Chlorophyll"],
            },
            "type": ["Grass", "Poison"],
            "hp": 45,
            "attack": 49,
            "defense": 49,
            "speed": 45,
        },
        {"id": 4, "name": "Charmander", "type": ["Fire"], "hp": 39},
        {"id": 7, "name": "Squirtle", "type": ["Water"], "hp": 44},
        {"id": 25, "name": "Pikachu", "type": ["Electric"], "hp": 35, "speed": 90},
    ]


@pytest.fixture
def valid_payload():
    return {
        "name": "Charizard",
        "description": "Spits fire that is hot enough to melt boulders.",
        "characteristics": {
            "height": "1.7 m",
            "weight": "90.5 kg",
            "base_experience": 240,
            "abilities": ["Blaze", "Solar Power"],
        },
        "type": ["Fire", "Flying"],
        "hp": 78,
        "attack": 84,
        "defense": 78,
        "speed": 100,
    }


@pytest.fixture
def data_file(tmp_path, sample_pokemon):
    return write_collection(tmp_path / "pokemon.json", sample_pokemon)


@pytest.fixture
def empty_data_file(tmp_path):
    return write_collection(tmp_path / "empty.json", [])


@pytest.fixture
def store(data_file):
    return JsonFileStore(data_file)


@pytest.fixture
def empty_store(empty_data_file):
    return JsonFileStore(empty_data_file)


@pytest.fixture
def service(store):
    return PokemonService(store)


@pytest.fixture
def empty_service(empty_store):
    return PokemonService(empty_store)


@pytest.fixture
def app_settings(data_file):
    return Settings(data_file=str(data_file), environment="test")


async def _client_for(app):
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(app_settings):
    """
    HTTPX AsyncClient talking to an app built over the temp data file.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(app_settings)
    async with await _client_for(app) as client:
        yield client


@pytest.fixture
def client_factory():
    """Build a client for custom settings (corrupt files, production mode)."""
    async def factory(custom_settings):
        return await _client_for(create_app(custom_settings))
    return factory
