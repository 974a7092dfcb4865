"""
JSON File Storage Implementation

DESIGN DECISION: A single pretty-printed JSON file is the storage backend:
1. The user can open and read their own data
2. No database setup required
3. The file doubles as a backup that can be re-imported

Writes go to a temporary file that atomically replaces the old snapshot,
so a crash mid-write never leaves a half-written file behind. Transient
OS errors are retried.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lifehub.config import StorageSettings, get_settings
from lifehub.log import get_logger
from lifehub.models.store import Store
from lifehub.services.storage.interface import (
    StorageWriteError,
    StoreGatewayInterface,
    snapshot_payload,
)


logger = get_logger(__name__)


class JsonFileStoreGateway(StoreGatewayInterface):
    """
    Persists the Store as <data_dir>/<storage_key>.json.

    The storage key is versioned ("lifehub.v2") so an incompatible
    future layout can live next to this one.
    """

    def __init__(self, settings: Optional[StorageSettings] = None):
        self._settings = settings or get_settings().storage
        self._path: Path = self._settings.snapshot_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[dict[str, Any]]:
        if not self._path.exists():
            logger.info("snapshot_missing", path=str(self._path))
            return None

        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("snapshot_corrupt", path=str(self._path), error=str(e))
            return None
        except OSError as e:
            logger.warning("snapshot_unreadable", path=str(self._path), error=str(e))
            return None

        if not isinstance(data, dict):
            logger.warning(
                "snapshot_corrupt",
                path=str(self._path),
                error=f"expected an object, got {type(data).__name__}",
            )
            return None

        logger.info("snapshot_loaded", path=str(self._path), keys=len(data))
        return data

    def _write(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def save(self, store: Store) -> None:
        text = json.dumps(snapshot_payload(store), indent=2, ensure_ascii=False)

        retrying = Retrying(
            stop=stop_after_attempt(self._settings.save_retry_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write(text)
        except OSError as e:
            logger.error("snapshot_save_failed", path=str(self._path), error=str(e))
            raise StorageWriteError(f"Could not save snapshot to {self._path}: {e}") from e

        logger.debug("snapshot_saved", path=str(self._path), bytes=len(text))
