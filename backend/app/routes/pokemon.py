"""
Pokedex Backend — Pokemon Route Handlers
=========================================

What:  CRUD endpoints under /api/pokemon.
How:   Dependencies parse the path id and the JSON body before the handler
       runs; handlers call PokemonService and wrap results in envelopes.

Route Inventory:
    GET    /api/pokemon?page=&limit=   paginated list
    GET    /api/pokemon/{id}           single Pokemon
    POST   /api/pokemon                create (payload fully validated)
    PUT    /api/pokemon/{id}           partial update
    DELETE /api/pokemon/{id}           delete
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from app.exceptions import MalformedRequestError, NotFoundError, ValidationError
from app.responses import success_response
from app.schemas.pokemon import (
    DeleteResponse,
    ErrorResponse,
    PokemonCreate,
    PokemonListResponse,
    PokemonResponse,
    PokemonUpdate,
    json_body_schema,
)
from app.services.pokemon_service import PokemonService
from app.services.store import reject_constant
from app.services.validation import validate_id, validate_pokemon_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pokemon", tags=["Pokemon"])


# ══════════════════════════════════════════════════════════════════════════
# Dependencies
# ══════════════════════════════════════════════════════════════════════════


def get_pokemon_service(request: Request) -> PokemonService:
    """The service instance built by create_app for this application."""
    return request.app.state.pokemon_service


def pokemon_id_param(
    pokemon_id: str = Path(description="Pokemon ID (positive integer)", examples=["1"]),
) -> int:
    return validate_id(pokemon_id)


async def json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Raises:
        MalformedRequestError: empty body, invalid JSON syntax, or a
            NaN/Infinity literal
    """
    raw = await request.body()
    try:
        return json.loads(raw, parse_constant=reject_constant)
    except ValueError as e:
        raise MalformedRequestError(detail=str(e))


def _require_object(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError(errors=["Request body must be a JSON object"])
    return payload


_ID_ERRORS = {
    400: {"description": "Invalid ID format", "model": ErrorResponse},
    404: {"description": "Pokemon not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


# ══════════════════════════════════════════════════════════════════════════
# Handlers
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "",
    responses={
        200: {"description": "List of Pokemon retrieved successfully", "model": PokemonListResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get all Pokemon",
    description="Retrieve a paginated list of all Pokemon in insertion order.",
)
async def list_pokemon(
    page: Optional[str] = Query(
        default=None, description="Page number (default 1)", examples=["1"]
    ),
    limit: Optional[str] = Query(
        default=None, description="Number of items per page (default 20, max 100)", examples=["20"]
    ),
    service: PokemonService = Depends(get_pokemon_service),
) -> JSONResponse:
    """
    Out-of-range or non-numeric page/limit values are coerced rather than
    rejected: page falls back to 1, limit to the default and is clamped.
    """
    result = await service.list_pokemon(page=page, limit=limit)
    return success_response(result, "Pokemon retrieved successfully")


@router.get(
    "/{pokemon_id}",
    responses={
        200: {"description": "Pokemon retrieved successfully", "model": PokemonResponse},
        **_ID_ERRORS,
    },
    summary="Get a Pokemon by ID",
)
async def get_pokemon(
    pokemon_id: int = Depends(pokemon_id_param),
    service: PokemonService = Depends(get_pokemon_service),
) -> JSONResponse:
    pokemon = await service.get_pokemon(pokemon_id)
    if pokemon is None:
        raise NotFoundError(resource_id=pokemon_id)
    return success_response(pokemon, "Pokemon retrieved successfully")


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Pokemon created successfully", "model": PokemonResponse},
        400: {"description": "Invalid input data", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a new Pokemon",
    description=(
        "Create a new Pokemon. The id is assigned by the server. "
        "All validation failures are reported together in `errors`."
    ),
    openapi_extra=json_body_schema(PokemonCreate),
)
async def create_pokemon(
    payload: Any = Depends(json_body),
    service: PokemonService = Depends(get_pokemon_service),
) -> JSONResponse:
    pokemon = await service.create_pokemon(validate_pokemon_payload(payload))
    return success_response(pokemon, "Pokemon created successfully", status_code=201)


@router.put(
    "/{pokemon_id}",
    responses={
        200: {"description": "Pokemon updated successfully", "model": PokemonResponse},
        **_ID_ERRORS,
    },
    summary="Update a Pokemon",
    description="Overwrite the given fields of an existing Pokemon. Omitted fields are kept.",
    openapi_extra=json_body_schema(PokemonUpdate),
)
async def update_pokemon(
    pokemon_id: int = Depends(pokemon_id_param),
    payload: Any = Depends(json_body),
    service: PokemonService = Depends(get_pokemon_service),
) -> JSONResponse:
    pokemon = await service.update_pokemon(pokemon_id, _require_object(payload))
    if pokemon is None:
        raise NotFoundError(resource_id=pokemon_id)
    return success_response(pokemon, "Pokemon updated successfully")


@router.delete(
    "/{pokemon_id}",
    responses={
        200: {"description": "Pokemon deleted successfully", "model": DeleteResponse},
        **_ID_ERRORS,
    },
    summary="Delete a Pokemon",
)
async def delete_pokemon(
    pokemon_id: int = Depends(pokemon_id_param),
    service: PokemonService = Depends(get_pokemon_service),
) -> JSONResponse:
    deleted = await service.delete_pokemon(pokemon_id)
    if not deleted:
        raise NotFoundError(resource_id=pokemon_id)
    return success_response(None, "Pokemon deleted successfully")
