"""
Pokedex Backend — Pydantic Records and API Schemas
===================================================

What:  Typed records for Pokemon and the response envelopes the API returns.
How:   FastAPI uses these models to generate the OpenAPI document served at
       /api-docs.json. Payload shape checks live in services/validation.py,
       which reports every violation at once in the envelope format.
Who:   Routes (docs + pagination serialization), PokemonService (pages).

Stored records stay plain JSON objects: clients may send extra fields and
stat values are not validated, so the service never coerces a stored
entity through these models.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Entity Records
# ══════════════════════════════════════════════════════════════════════════


class Characteristics(BaseModel):
    """Physical and game characteristics nested inside a Pokemon."""

    height: str = Field(description="Height as displayed, e.g. '0.7 m'", examples=["1.7 m"])
    weight: str = Field(description="Weight as displayed, e.g. '6.9 kg'", examples=["90.5 kg"])
    base_experience: float = Field(ge=0, description="Base experience yield", examples=[240])
    abilities: List[str] = Field(
        min_length=1, description="Ability names", examples=[["Blaze", "Solar Power"]]
    )


class PokemonBase(BaseModel):
    """Fields shared by every Pokemon representation."""

    model_config = ConfigDict(extra="allow")

    hp: Optional[int] = Field(default=None, examples=[78])
    attack: Optional[int] = Field(default=None, examples=[84])
    defense: Optional[int] = Field(default=None, examples=[78])
    speed: Optional[int] = Field(default=None, examples=[100])


class PokemonCreate(PokemonBase):
    """
    Payload accepted by POST /api/pokemon.

    Required fields mirror the checks in validate_pokemon_payload so the
    published documentation and the enforced contract agree.
    """

    name: str = Field(min_length=1, examples=["Charizard"])
    description: str = Field(
        min_length=1, examples=["Spits fire that is hot enough to melt boulders."]
    )
    characteristics: Characteristics
    type: List[str] = Field(min_length=1, examples=[["Fire", "Flying"]])


class PokemonUpdate(PokemonBase):
    """Partial payload accepted by PUT /api/pokemon/{id}; omitted fields are kept."""

    name: Optional[str] = Field(default=None, examples=["Pikachu"])
    description: Optional[str] = None
    characteristics: Optional[Characteristics] = None
    type: Optional[List[str]] = Field(default=None, examples=[["Electric"]])


class Pokemon(PokemonBase):
    """A stored Pokemon as returned by the API."""

    id: int = Field(ge=1, description="System-assigned identifier", examples=[6])
    name: str = Field(examples=["Charizard"])
    type: List[str] = Field(examples=[["Fire", "Flying"]])
    description: Optional[str] = None
    characteristics: Optional[Characteristics] = None


def json_body_schema(model: type) -> Dict[str, Any]:
    """
    OpenAPI requestBody for routes that read the raw JSON body.

    Nested models are referenced from components/schemas, where FastAPI
    registers them through the response models.
    """
    schema = model.model_json_schema(ref_template="#/components/schemas/{model}")
    schema.pop("$defs", None)
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema}},
        }
    }


# ══════════════════════════════════════════════════════════════════════════
# Pagination
# ══════════════════════════════════════════════════════════════════════════


class PaginationInfo(BaseModel):
    """
    Page descriptor returned alongside every list response.

    Serialized with camelCase keys (currentPage, hasNextPage, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int = Field(examples=[1])
    items_per_page: int = Field(examples=[20])
    total_items: int = Field(examples=[200])
    total_pages: int = Field(examples=[10])
    has_next_page: bool = Field(examples=[True])
    has_previous_page: bool = Field(examples=[False])


class PokemonPage(BaseModel):
    """One page of the collection, as computed by PokemonService.list_pokemon."""

    pokemon: List[Dict[str, Any]]
    pagination: PaginationInfo


class PokemonListData(BaseModel):
    pokemon: List[Pokemon]
    pagination: PaginationInfo


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes — documented shapes of every API response
# ══════════════════════════════════════════════════════════════════════════


class PokemonResponse(BaseModel):
    success: bool = Field(default=True, examples=[True])
    message: str = Field(examples=["Pokemon retrieved successfully"])
    data: Pokemon


class PokemonListResponse(BaseModel):
    success: bool = Field(default=True, examples=[True])
    message: str = Field(examples=["Pokemon retrieved successfully"])
    data: PokemonListData


class DeleteResponse(BaseModel):
    success: bool = Field(default=True, examples=[True])
    message: str = Field(examples=["Pokemon deleted successfully"])
    data: None = None


class ErrorResponse(BaseModel):
    """
    Standardized error envelope for all API errors.

    Fields:
        success: Always false
        message: Human-readable description
        errors:  Every validation violation (400 validation failures only)
        error:   Underlying detail (malformed JSON, or 5xx outside production)

    Example:
        {
            "success": false,
            "message": "Invalid ID. Must be a positive number"
        }
    """

    success: bool = Field(default=False, examples=[False])
    message: str = Field(examples=["Pokemon not found"])
    errors: Optional[List[str]] = Field(default=None)
    error: Optional[str] = Field(default=None)


class HealthResponse(BaseModel):
    """Health check response showing service and data store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    data_store: str = Field(description="Collection file status: readable, unreadable")
    uptime_seconds: float = Field(description="Seconds since service started")


class WelcomeResponse(BaseModel):
    success: bool = True
    message: str = Field(examples=["Welcome to Pokemon API"])
    version: str
    endpoints: Dict[str, str]
    documentation: str
