"""Flat-file store for the verified set.

The whole JSON document is read on every lookup and rewritten on every
update. Reads fail open: a missing, unreadable or corrupt file means
"nobody is verified yet". Writes fail loudly with StorageError.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from errors import StorageError
from schemas.models.verification import VerificationRecord
from shared.logging import get_logger

log = get_logger(__name__)

Records = dict[str, VerificationRecord]


class VerifiedStore:
    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        # Serialises load-modify-save in mark_verified
        self._write_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def ensure_exists(self) -> None:
        """Create the file with an empty mapping if it is not there yet."""
        if self._path.exists():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self.save({})
        log.info("verified_store_created", path=str(self._path))

    def load(self) -> Records:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning(
                "verified_store_read_failed",
                path=str(self._path),
                error=str(e),
                error_type=type(e).__name__,
            )
            return {}

        if not isinstance(raw, dict):
            log.warning(
                "verified_store_malformed",
                path=str(self._path),
                root_type=type(raw).__name__,
            )
            return {}

        records: Records = {}
        for user_id, entry in raw.items():
            try:
                records[user_id] = VerificationRecord.model_validate(entry)
            except PydanticValidationError:
                log.warning("verified_store_entry_skipped", user_id=user_id)
        return records

    def save(self, records: Records) -> None:
        """Overwrite the file with *records* in full."""
        payload = {
            user_id: record.model_dump(mode="json")
            for user_id, record in records.items()
        }
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Failed to write verified store") from e

    def get(self, user_id: str) -> Optional[VerificationRecord]:
        return self.load().get(user_id)

    def is_verified(self, user_id: str) -> bool:
        record = self.get(user_id)
        return record is not None and record.verified is True

    def mark_verified(
        self, user_id: str, timestamp: Optional[int] = None
    ) -> VerificationRecord:
        """Insert or overwrite *user_id*'s record with a fresh timestamp."""
        record = VerificationRecord.fresh(timestamp)
        with self._write_lock:
            records = self.load()
            records[user_id] = record
            self.save(records)
        return record

    def is_healthy(self) -> bool:
        """True when the backing file exists and is readable and writable."""
        return self._path.is_file() and os.access(self._path, os.R_OK | os.W_OK)
