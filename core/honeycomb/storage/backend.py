"""
Hex storage - the durable mapping from hex id to hex record.

Simple, portable, version-controllable: each hex is a separate JSON file.

Directory structure:
{base_path}/
  hexes/
    {hex_id}.json

Records are validated against the Hex schema on every read. A file that does
not parse or does not match the schema is logged and treated as absent; it
never raises past the store.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from honeycomb.graph.hex import Hex
from honeycomb.utils.io import atomic_write

logger = logging.getLogger(__name__)


class HexStore(ABC):
    """Contract every hex store fulfils."""

    @abstractmethod
    async def get(self, hex_id: str) -> Hex | None:
        """Return the hex, or None if it is missing or malformed."""

    @abstractmethod
    async def save(self, hex: Hex) -> None:
        """Upsert with full overwrite. Write failures propagate."""

    @abstractmethod
    async def delete(self, hex_id: str) -> bool:
        """Remove a hex. Returns False if it did not exist."""

    @abstractmethod
    async def list_all(self) -> list[Hex]:
        """All valid hexes ordered by id; malformed records are skipped."""

    @abstractmethod
    async def list_ids(self) -> list[str]:
        """All stored ids ordered by id."""


def validate_hex(data: Any, source: str = "unknown") -> Hex | None:
    """Validate a raw record against the Hex schema, logging and returning None on failure."""
    try:
        return Hex.model_validate(data)
    except ValidationError as e:
        fields = {".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()}
        logger.warning("Invalid hex [%s]: %s", source, fields)
        return None


def validate_key(key: str) -> None:
    """
    Validate a hex id before it becomes a file name.

    Raises:
        ValueError: If the id is empty or could escape the hexes directory
    """
    if not key or key.strip() == "":
        raise ValueError("Hex id cannot be empty")

    if "/" in key or "\\" in key:
        raise ValueError(f"Invalid hex id: path separators not allowed in '{key}'")

    if ".." in key or key.startswith("."):
        raise ValueError(f"Invalid hex id: path traversal detected in '{key}'")

    if len(key) > 1 and key[1] == ":":
        raise ValueError(f"Invalid hex id: absolute paths not allowed in '{key}'")

    if "\x00" in key:
        raise ValueError("Invalid hex id: null bytes not allowed")

    dangerous_chars = {"<", ">", "|", "&", "$", "`", "'", '"'}
    if any(char in key for char in dangerous_chars):
        raise ValueError(f"Invalid hex id: contains dangerous characters in '{key}'")


class FileHexStore(HexStore):
    """One JSON file per hex. File I/O runs in worker threads."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)
        self.hex_dir = self.base_path / "hexes"
        self.hex_dir.mkdir(parents=True, exist_ok=True)

    def _hex_path(self, hex_id: str) -> Path:
        return self.hex_dir / f"{hex_id}.json"

    def _read_file(self, path: Path) -> Hex | None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read hex file %s: %s", path.name, e)
            return None
        return validate_hex(data, path.name)

    async def get(self, hex_id: str) -> Hex | None:
        try:
            validate_key(hex_id)
        except ValueError as e:
            logger.warning("Rejected hex lookup: %s", e)
            return None

        path = self._hex_path(hex_id)

        def _read() -> Hex | None:
            if not path.exists():
                return None
            return self._read_file(path)

        return await asyncio.to_thread(_read)

    async def save(self, hex: Hex) -> None:
        validate_key(hex.id)
        content = json.dumps(hex.to_record(), indent=2, ensure_ascii=False)

        def _write() -> None:
            with atomic_write(self._hex_path(hex.id)) as f:
                f.write(content)

        await asyncio.to_thread(_write)
        logger.debug("Saved hex %s", hex.id)

    async def delete(self, hex_id: str) -> bool:
        try:
            validate_key(hex_id)
        except ValueError as e:
            logger.warning("Rejected hex delete: %s", e)
            return False

        path = self._hex_path(hex_id)

        def _delete() -> bool:
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            return True

        return await asyncio.to_thread(_delete)

    async def list_all(self) -> list[Hex]:
        def _scan() -> list[Hex]:
            hexes = []
            for path in sorted(self.hex_dir.glob("*.json")):
                hex = self._read_file(path)
                if hex is not None:
                    hexes.append(hex)
            return hexes

        return await asyncio.to_thread(_scan)

    async def list_ids(self) -> list[str]:
        def _scan() -> list[str]:
            return sorted(path.stem for path in self.hex_dir.glob("*.json"))

        return await asyncio.to_thread(_scan)
