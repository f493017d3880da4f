"""
Pokedex Backend — API Endpoint Tests
=====================================

What:  End-to-end tests through the FastAPI app with an HTTPX client.
How:   Each test gets an app built by create_app over a temp data file.

What we test:
    ✅ Success envelopes and status codes for every CRUD route
    ✅ 400 for bad ids, invalid payloads, malformed JSON and NaN/Infinity
    ✅ 404 for missing Pokemon and undefined routes
    ✅ 500 for storage failures, with detail hidden in production
    ✅ Request id header, welcome document, health check, OpenAPI docs
"""

import json

import pytest
from fastapi import Query
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app


class TestListEndpoint:

    @pytest.mark.asyncio
    async def test_list_envelope(self, test_client, sample_pokemon):
        response = await test_client.get("/api/pokemon")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Pokemon retrieved successfully"
        assert body["data"]["pokemon"] == sample_pokemon
        assert body["data"]["pagination"] == {
            "currentPage": 1,
            "itemsPerPage": 20,
            "totalItems": 4,
            "totalPages": 1,
            "hasNextPage": False,
            "hasPreviousPage": False,
        }

    @pytest.mark.asyncio
    async def test_list_with_query_params(self, test_client):
        response = await test_client.get("/api/pokemon", params={"page": 2, "limit": 3})

        data = response.json()["data"]
        assert [p["id"] for p in data["pokemon"]] == [25]
        assert data["pagination"]["hasPreviousPage"] is True
        assert data["pagination"]["hasNextPage"] is False

    @pytest.mark.asyncio
    async def test_invalid_query_params_fall_back(self, test_client):
        response = await test_client.get("/api/pokemon?page=abc&limit=1000")

        assert response.status_code == 200
        pagination = response.json()["data"]["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["itemsPerPage"] == 100


class TestGetEndpoint:

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_client, sample_pokemon):
        response = await test_client.get("/api/pokemon/1")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Pokemon retrieved successfully",
            "data": sample_pokemon[0],
        }

    @pytest.mark.asyncio
    async def test_non_numeric_id(self, test_client):
        response = await test_client.get("/api/pokemon/abc")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Invalid ID. Must be a positive number",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["0", "-1", "2.5", "1_000", "\uff11"])
    async def test_non_positive_ids(self, test_client, raw_id):
        response = await test_client.get(f"/api/pokemon/{raw_id}")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_pokemon(self, test_client):
        response = await test_client.get("/api/pokemon/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Pokemon not found"}


class TestCreateEndpoint:

    @pytest.mark.asyncio
    async def test_create(self, test_client, valid_payload):
        response = await test_client.post("/api/pokemon", json=valid_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Pokemon created successfully"
        assert body["data"] == {"id": 26, **valid_payload}

        fetched = await test_client.get("/api/pokemon/26")
        assert fetched.json()["data"] == body["data"]

    @pytest.mark.asyncio
    async def test_empty_payload_lists_all_errors(self, test_client):
        response = await test_client.post("/api/pokemon", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert len(body["errors"]) >= 5

    @pytest.mark.asyncio
    async def test_documented_minimal_payload_is_rejected(self, test_client):
        """Creation requires description and characteristics as well."""
        response = await test_client.post(
            "/api/pokemon", json={"name": "Bulbasaur", "type": ["Grass", "Poison"]}
        )

        assert response.status_code == 400
        assert "Description is required and must be a non-empty string" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/pokemon",
            content=b'{"name": "Mew",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid JSON format"
        assert body["error"]

    @pytest.mark.asyncio
    async def test_array_body(self, test_client):
        response = await test_client.post("/api/pokemon", json=[1, 2])

        assert response.status_code == 400
        assert response.json()["errors"] == ["Request body must be a JSON object"]

    @pytest.mark.asyncio
    async def test_rejected_payload_is_not_stored(self, test_client, store):
        await test_client.post("/api/pokemon", json={"name": "Mew"})
        assert len(await store.load()) == 4

    @pytest.mark.asyncio
    async def test_nan_literal_rejected(self, test_client, store, valid_payload):
        """NaN is not JSON even though Python's decoder accepts it by default."""
        body = json.dumps(valid_payload).replace('"base_experience": 240', '"base_experience": NaN')

        response = await test_client.post(
            "/api/pokemon",
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON format"
        assert "NaN" in response.json()["error"]
        assert len(await store.load()) == 4


class TestUpdateEndpoint:

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client, sample_pokemon):
        response = await test_client.put("/api/pokemon/1", json={"name": "Ivysaur", "id": 77})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Pokemon updated successfully"
        assert body["data"] == {**sample_pokemon[0], "name": "Ivysaur"}

    @pytest.mark.asyncio
    async def test_update_missing(self, test_client):
        response = await test_client.put("/api/pokemon/2", json={"name": "X"})

        assert response.status_code == 404
        assert response.json()["message"] == "Pokemon not found"

    @pytest.mark.asyncio
    async def test_update_invalid_id(self, test_client):
        response = await test_client.put("/api/pokemon/abc", json={"name": "X"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid ID. Must be a positive number"

    @pytest.mark.asyncio
    async def test_update_non_object_body(self, test_client):
        response = await test_client.put("/api/pokemon/1", json="Ivysaur")

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity"])
    async def test_infinity_literal_rejected(self, test_client, data_file, literal):
        before = data_file.read_text(encoding="utf-8")

        response = await test_client.put(
            "/api/pokemon/1",
            content=f'{{"hp": {literal}}}'.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON format"
        assert data_file.read_text(encoding="utf-8") == before


class TestDeleteEndpoint:

    @pytest.mark.asyncio
    async def test_delete(self, test_client):
        response = await test_client.delete("/api/pokemon/7")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Pokemon deleted successfully",
            "data": None,
        }

        assert (await test_client.get("/api/pokemon/7")).status_code == 404
        assert (await test_client.delete("/api/pokemon/7")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_invalid_id(self, test_client):
        response = await test_client.delete("/api/pokemon/-5")
        assert response.status_code == 400


class TestErrorMapping:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/api/digimon")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Endpoint not found"}

    @pytest.mark.asyncio
    async def test_unsupported_method(self, test_client):
        response = await test_client.patch("/api/pokemon/1", json={})

        assert response.status_code == 404
        assert response.json()["message"] == "Endpoint not found"

    @pytest.mark.asyncio
    async def test_corrupt_store_reports_detail_outside_production(self, tmp_path, client_factory):
        path = tmp_path / "corrupt.json"
        path.write_text("not json", encoding="utf-8")

        async with await client_factory(Settings(data_file=str(path), environment="development")) as client:
            response = await client.get("/api/pokemon")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Error reading Pokemon data"
        assert body["error"]

    @pytest.mark.asyncio
    async def test_corrupt_store_hides_detail_in_production(self, tmp_path, client_factory):
        path = tmp_path / "corrupt.json"
        path.write_text("not json", encoding="utf-8")

        async with await client_factory(Settings(data_file=str(path), environment="production")) as client:
            response = await client.get("/api/pokemon/1")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Error reading Pokemon data"}

    @pytest.mark.asyncio
    async def test_framework_validation_uses_error_envelope(self, app_settings):
        """Typed parameters rejected by FastAPI get the same 400 envelope."""
        app = create_app(app_settings)

        @app.get("/api/typed")
        async def typed(count: int = Query(...)):
            return {"count": count}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/typed", params={"count": "many"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["errors"][0].startswith("query.count: ")


class TestPlumbing:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/pokemon")
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/pokemon/abc", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_welcome(self, test_client):
        response = await test_client.get("/")

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["message"] == "Welcome to Pokemon API"
        assert body["endpoints"]["getAll"] == "GET /api/pokemon"
        assert body["documentation"] == "/api-docs"

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["data_store"] == "readable"

    @pytest.mark.asyncio
    async def test_health_unhealthy(self, tmp_path, client_factory):
        async with await client_factory(Settings(data_file=str(tmp_path / "gone.json"))) as client:
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_openapi_document(self, test_client):
        response = await test_client.get("/api-docs.json")

        assert response.status_code == 200
        document = response.json()
        assert "/api/pokemon" in document["paths"]
        assert "/api/pokemon/{pokemon_id}" in document["paths"]
        create_schema = document["paths"]["/api/pokemon"]["post"]["requestBody"]["content"]["application/json"]["schema"]
        assert set(create_schema["required"]) == {"name", "description", "characteristics", "type"}
