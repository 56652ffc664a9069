"""Hex storage backends."""

from honeycomb.storage.backend import FileHexStore, HexStore, validate_hex
from honeycomb.storage.memory import InMemoryHexStore

__all__ = [
    "HexStore",
    "FileHexStore",
    "InMemoryHexStore",
    "validate_hex",
]
