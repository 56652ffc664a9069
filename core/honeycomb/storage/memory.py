"""In-memory hex store for tests and embedded use.

Holds raw records, not model instances, so every read validates and returns a
fresh copy just like the file store does.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from honeycomb.graph.hex import Hex
from honeycomb.storage.backend import HexStore, validate_hex


class InMemoryHexStore(HexStore):
    def __init__(self, records: Mapping[str, Mapping[str, Any]] | None = None):
        self._records: dict[str, dict[str, Any]] = {
            hex_id: copy.deepcopy(dict(record)) for hex_id, record in (records or {}).items()
        }

    async def get(self, hex_id: str) -> Hex | None:
        record = self._records.get(hex_id)
        if record is None:
            return None
        return validate_hex(copy.deepcopy(record), hex_id)

    async def save(self, hex: Hex) -> None:
        self._records[hex.id] = hex.to_record()

    async def delete(self, hex_id: str) -> bool:
        return self._records.pop(hex_id, None) is not None

    async def list_all(self) -> list[Hex]:
        hexes = []
        for hex_id in sorted(self._records):
            hex = validate_hex(copy.deepcopy(self._records[hex_id]), hex_id)
            if hex is not None:
                hexes.append(hex)
        return hexes

    async def list_ids(self) -> list[str]:
        return sorted(self._records)
