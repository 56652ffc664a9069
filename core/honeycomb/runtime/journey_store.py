"""File-based storage for the journey log.

One JSONL file, one JourneyLogEntry per line, append-only. Lines are never
rewritten, so concurrent appenders cannot corrupt earlier entries; a partial
line left by a crash is skipped on read.

Storage layout::

    {storage_root}/
      hexes/            # FileHexStore
      journeys.jsonl    # this store
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from honeycomb.schemas.journey import JourneyLogEntry

logger = logging.getLogger(__name__)

DEFAULT_JOURNEY_LIMIT = 100


class JourneyLogStore:
    """Append-only JSONL journey log."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, entry: JourneyLogEntry) -> None:
        """Append one JSONL line. Sync; raises on I/O failure."""
        line = json.dumps(entry.to_record(), ensure_ascii=False) + "\n"
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "a", encoding="utf-8") as f:
            f.write(line)

    def read_all_sync(self) -> list[JourneyLogEntry]:
        return _read_jsonl_as_models(self._path, JourneyLogEntry)

    async def read_recent(self, limit: int = DEFAULT_JOURNEY_LIMIT) -> list[JourneyLogEntry]:
        """Return the most recent ``limit`` entries, oldest first."""
        if limit <= 0:
            return []
        entries = await asyncio.to_thread(self.read_all_sync)
        return entries[-limit:]


def _read_jsonl_as_models(path: Path, model_cls: type) -> list:
    """Parse a JSONL file into a list of Pydantic model instances.

    Skips blank lines and corrupt lines (partial writes from crashes).
    """
    results = []
    if not path.exists():
        return results
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    results.append(model_cls.model_validate(json.loads(line)))
                except Exception as e:
                    logger.warning("Skipping corrupt JSONL line in %s: %s", path, e)
                    continue
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
    return results
