"""
Pokedex Backend — JSON File Store
==================================

What:  Durable load/save of the whole Pokemon collection as one JSON document.
How:   Reads parse the full file; writes serialize the full collection to a
       temporary sibling file and atomically replace the target with it.
Who:   Owned by PokemonService (injected at app construction time).
When:  Every API operation loads the file fresh; every mutation rewrites it.

On-disk layout:
    data/
    └── pokemon.json        [ {"id": 1, "name": "Bulbasaur", ...}, ... ]

Consistency model:
    - Readers never observe a half-written document: os.replace on the same
      filesystem is atomic, so a read sees either the old or the new file.
    - `lock` serializes load → mutate → save cycles inside one process.
      Separate processes writing the same file can still lose updates.
"""

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Union

import aiofiles
import aiofiles.os

from app.exceptions import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

Collection = List[Dict[str, Any]]


def reject_constant(token: str) -> Any:
    """`parse_constant` hook for json.loads: NaN and ±Infinity are not JSON."""
    raise ValueError(f"{token} is not a valid JSON value")


class JsonFileStore:
    """
    Single-table store backed by a pretty-printed JSON array.

    Usage:
        store = JsonFileStore("data/pokemon.json")
        async with store.lock:
            pokemon = await store.load()
            pokemon.append({"id": 1, "name": "Bulbasaur", "type": ["Grass"]})
            await store.save(pokemon)
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    def ensure_exists(self) -> None:
        """
        Create the data file with an empty collection if it is absent.

        Called once during app construction; existing files are left untouched.
        """
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]\n", encoding="utf-8")
            logger.info("Initialized empty collection at %s", self.path)
        except OSError as e:
            logger.error("Failed to initialize data file %s: %s", self.path, str(e))
            raise StorageWriteError(context={"path": str(self.path), "os_error": str(e)})

    async def is_readable(self) -> bool:
        """Lightweight readability check used by /health."""
        try:
            await self.load()
        except StorageReadError:
            return False
        return True

    async def load(self) -> Collection:
        """
        Read and parse the full collection.

        Raises:
            StorageReadError: file unreadable, not JSON, or not a JSON array
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            logger.error("Error reading data file %s: %s", self.path, str(e))
            raise StorageReadError(context={"path": str(self.path), "os_error": str(e)})

        try:
            data = json.loads(raw, parse_constant=reject_constant)
        except ValueError as e:
            logger.error("Data file %s is not valid JSON: %s", self.path, str(e))
            raise StorageReadError(context={"path": str(self.path), "decode_error": str(e)})

        if not isinstance(data, list):
            logger.error(
                "Data file %s holds a %s, expected a JSON array",
                self.path,
                type(data).__name__,
            )
            raise StorageReadError(
                context={"path": str(self.path), "decode_error": "document is not a JSON array"}
            )

        return data

    async def save(self, collection: Collection) -> None:
        """
        Atomically replace the file with a serialization of `collection`.

        Raises:
            StorageWriteError: serialization, write or rename failed
        """
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")

        try:
            content = json.dumps(collection, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
        except (TypeError, ValueError) as e:
            logger.error("Collection is not JSON serializable: %s", str(e))
            raise StorageWriteError(context={"path": str(self.path), "encode_error": str(e)})

        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Error writing data file %s: %s", self.path, str(e))
            await self._discard(tmp_path)
            raise StorageWriteError(context={"path": str(self.path), "os_error": str(e)})

        logger.debug("Saved %d records to %s", len(collection), self.path)

    async def _discard(self, tmp_path: Path) -> None:
        # Best-effort removal of a partially written temp file
        try:
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
        except OSError as e:
            logger.warning("Failed to remove temp file %s: %s", tmp_path, str(e))
