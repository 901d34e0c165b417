"""Seed file loading: one JSON array per seed target."""

import json
import logging
from pathlib import Path
from typing import Any

from storeseed.collections import SEED_FILES, SeedTarget
from storeseed.errors import MalformedInputError

logger = logging.getLogger(__name__)


class SeedFileLoader:
    """Read the raw record list for each seed target from *data_dir*.

    Only the top-level shape is checked here; field-level validation belongs
    to whichever component consumes the records.
    """

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, target: SeedTarget) -> Path:
        return self.data_dir / SEED_FILES[target]

    def load(self, target: SeedTarget) -> list[Any]:
        return self.load_path(self.path_for(target))

    def load_path(self, path: Path) -> list[Any]:
        source = path.name
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MalformedInputError("file could not be read", source=source, original_error=exc) from exc

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedInputError("invalid JSON", source=source, original_error=exc) from exc

        if not isinstance(records, list):
            raise MalformedInputError(
                f"must be an array, got {type(records).__name__}",
                source=source,
            )

        logger.debug("Loaded %d records from %s", len(records), path)
        return records
