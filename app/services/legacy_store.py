"""Flat-text key-value store used before records moved into the RecordStore.

Each key is a single UTF-8 file ``<directory>/<key>.json``.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LEGACY_PAYLOAD_KEY = "chronos_data"


class LegacyPayloadStore:
    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str = LEGACY_PAYLOAD_KEY) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, value: str, key: str = LEGACY_PAYLOAD_KEY) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove(self, key: str = LEGACY_PAYLOAD_KEY) -> None:
        self._path(key).unlink(missing_ok=True)
        logger.info("Removed legacy payload key=%s", key)
