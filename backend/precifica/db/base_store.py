"""
Base store — shared JSON file access for all local stores.

Local persistence mirrors what the browser build kept in localStorage:
one JSON document per file under the configured data directory. Writes go
to a temporary file first and are then moved into place, so a crash never
leaves a half-written file behind.
"""

import json
import logging
import os
import tempfile
from typing import Any

from precifica.core.config import Settings, settings as default_settings
from precifica.core.exceptions import StorageError

logger = logging.getLogger("base_store")


class BaseStore:
    """Base class for all local stores providing JSON read/write primitives."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    def _read_json(self, path: str, default: Any) -> Any:
        """Read a JSON file, returning default when it does not exist or is corrupt."""
        if not os.path.exists(path):
            return default
        try:
            with open(path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except ValueError as e:
            logger.warning("local file corrupt path=%s detail=%s", path, str(e))
            return default
        except OSError as e:
            logger.info("local read error path=%s detail=%s", path, str(e))
            raise StorageError(f"Reading {path} failed: {e}") from e

    def _write_json(self, path: str, data: Any) -> None:
        """Atomically replace a JSON file."""
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=os.path.dirname(path) or ".", prefix=".tmp-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as e:
            logger.info("local write error path=%s detail=%s", path, str(e))
            raise StorageError(f"Writing {path} failed: {e}") from e
