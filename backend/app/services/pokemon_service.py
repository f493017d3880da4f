"""
Pokedex Backend — Pokemon Service (Business Logic)
===================================================

What:  List/get/create/update/delete semantics over the JSON collection.
How:   Every call loads the collection fresh from the injected store;
       mutations run load → mutate → save under the store's lock.
Who:   Called by route handlers in routes/pokemon.py.

ID assignment:
    new id = max(existing ids) + 1, or 1 for an empty collection.
    Gaps left by deletions are never reused: ids [1, 2, 5] → next is 6.

Not-found handling:
    get/update return None and delete returns False for a missing id.
    The route layer turns those sentinels into 404 responses.
"""

import logging
import math
from typing import Any, Dict, Optional

from app.config import settings
from app.schemas.pokemon import PaginationInfo, PokemonPage
from app.services.store import Collection, JsonFileStore
from app.services.validation import parse_int

logger = logging.getLogger(__name__)


def _coerce_int(raw: Any, default: int) -> int:
    """Parse a query value as an int, falling back to `default` when absent or invalid."""
    parsed = parse_int(raw)
    return default if parsed is None else parsed


def _find_index(collection: Collection, pokemon_id: int) -> Optional[int]:
    for index, pokemon in enumerate(collection):
        if pokemon.get("id") == pokemon_id:
            return index
    return None


def _next_id(collection: Collection) -> int:
    ids = [p["id"] for p in collection if isinstance(p.get("id"), int)]
    return max(ids) + 1 if ids else 1


class PokemonService:
    """
    Business logic layer for Pokemon operations.

    Responsibilities:
        - list_pokemon(): offset pagination with page descriptor
        - get_pokemon(): linear scan by id
        - create_pokemon(): id assignment and append
        - update_pokemon(): shallow merge that preserves id
        - delete_pokemon(): removal by id

    Storage errors (StorageReadError/StorageWriteError) propagate unchanged
    to the global exception handlers.
    """

    def __init__(
        self,
        store: JsonFileStore,
        default_page_size: Optional[int] = None,
        max_page_size: Optional[int] = None,
    ):
        self.store = store
        self.default_page_size = default_page_size or settings.default_page_size
        self.max_page_size = max_page_size or settings.max_page_size

    async def list_pokemon(self, page: Any = None, limit: Any = None) -> PokemonPage:
        """
        Return one page of the collection in insertion order.

        Args:
            page:  1-based page number; absent/invalid → 1, values < 1 → 1
            limit: page size; absent/invalid → default, clamped into [1, max]

        A page past the end yields an empty list, not an error.
        """
        page_num = max(1, _coerce_int(page, 1))
        limit_num = max(1, min(self.max_page_size, _coerce_int(limit, self.default_page_size)))

        pokemon = await self.store.load()
        total_items = len(pokemon)
        total_pages = math.ceil(total_items / limit_num)

        start = (page_num - 1) * limit_num
        items = pokemon[start:start + limit_num]

        return PokemonPage(
            pokemon=items,
            pagination=PaginationInfo(
                current_page=page_num,
                items_per_page=limit_num,
                total_items=total_items,
                total_pages=total_pages,
                has_next_page=page_num < total_pages,
                has_previous_page=page_num > 1,
            ),
        )

    async def get_pokemon(self, pokemon_id: int) -> Optional[Dict[str, Any]]:
        """Return the first Pokemon with a matching id, or None."""
        pokemon = await self.store.load()
        index = _find_index(pokemon, pokemon_id)
        if index is None:
            return None
        return pokemon[index]

    async def create_pokemon(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append a new Pokemon with the next id and persist the collection.

        Any `id` present in the payload is ignored.

        Returns:
            The stored record, id first followed by the payload fields.
        """
        async with self.store.lock:
            pokemon = await self.store.load()
            new_pokemon = {"id": _next_id(pokemon)}
            new_pokemon.update({k: v for k, v in payload.items() if k != "id"})
            pokemon.append(new_pokemon)
            await self.store.save(pokemon)

        logger.info("Created Pokemon %d (%s)", new_pokemon["id"], new_pokemon.get("name"))
        return new_pokemon

    async def update_pokemon(
        self, pokemon_id: int, payload: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Overwrite the given fields of an existing Pokemon.

        Fields omitted from the payload keep their stored values and the
        original id always wins over a payload id.

        Returns:
            The updated record, or None if no Pokemon has `pokemon_id`.
        """
        async with self.store.lock:
            pokemon = await self.store.load()
            index = _find_index(pokemon, pokemon_id)
            if index is None:
                return None

            existing = pokemon[index]
            updated = {**existing, **payload, "id": existing["id"]}
            pokemon[index] = updated
            await self.store.save(pokemon)

        logger.info("Updated Pokemon %d (fields: %s)", pokemon_id, ", ".join(sorted(payload)))
        return updated

    async def delete_pokemon(self, pokemon_id: int) -> bool:
        """Remove a Pokemon; False when the id does not exist."""
        async with self.store.lock:
            pokemon = await self.store.load()
            index = _find_index(pokemon, pokemon_id)
            if index is None:
                return False

            del pokemon[index]
            await self.store.save(pokemon)

        logger.info("Deleted Pokemon %d", pokemon_id)
        return True
