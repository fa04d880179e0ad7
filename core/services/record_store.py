"""
Keyed record storage with a denormalized index.

Each record lives under '<prefix>:<id>'; a list of index entries lives under
'<prefix>s:index'. Creates and deletes are two separate writes (record, then
index) and are NOT atomic. The reconciliation rules are:

- An index entry whose record is missing is stale but harmless. Listing
  skips it; exports fall back to the index summary.
- A record with no index entry is invisible to listing but still
  retrievable by id.

Concurrent writers race; the last write of the record or index wins.
"""

import logging
from typing import Any, Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel

from core.exceptions import NotFoundError
from core.storage import BlobStore
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordStore(Generic[RecordT]):
    """
    Base class for the valuation, lead and blog post stores.

    Subclasses set PREFIX and MODEL and implement index_entry().
    """

    PREFIX: str = ""
    MODEL: type[BaseModel] = BaseModel

    def __init__(self, blobs: BlobStore):
        self.blobs = blobs

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    @property
    def index_key(self) -> str:
        return f"{self.PREFIX}s:index"

    def record_key(self, record_id: str) -> str:
        return f"{self.PREFIX}:{record_id}"

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def index_entry(self, record: RecordT) -> dict[str, Any]:
        """Summary stored in the index for a record."""
        raise NotImplementedError

    def sort_key(self, record: RecordT) -> Any:
        """Key for list() ordering, applied in descending order."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Index
    # -------------------------------------------------------------------------

    def read_index(self) -> list[dict[str, Any]]:
        """All index entries in insertion order. Missing index reads as empty."""
        data = self.blobs.get_json(self.index_key)
        if not isinstance(data, list):
            return []
        return data

    def _write_index(self, entries: list[dict[str, Any]]) -> None:
        self.blobs.set_json(self.index_key, entries)

    def _index_upsert(self, record: RecordT) -> None:
        entry = self.index_entry(record)
        entries = self.read_index()
        for i, existing in enumerate(entries):
            if existing.get("id") == entry["id"]:
                entries[i] = entry
                break
        else:
            entries.append(entry)
        self._write_index(entries)

    def _index_remove(self, record_id: str) -> bool:
        entries = self.read_index()
        remaining = [e for e in entries if e.get("id") != record_id]
        if len(remaining) == len(entries):
            return False
        self._write_index(remaining)
        return True

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def _save(self, record: RecordT) -> None:
        self.blobs.set_json(self.record_key(record.id), record.model_dump(mode="json"))

    def _create(self, fields: dict[str, Any]) -> RecordT:
        """Assign id and timestamps, write the record, then its index entry."""
        now = now_utc()
        record = self.MODEL.model_validate({
            **fields,
            "id": str(uuid4()),
            "created_at": now,
            "updated_at": now,
        })

        self._save(record)
        self._index_upsert(record)

        logger.info(f"Created {self.PREFIX} {record.id}")
        return record

    def _update(self, record_id: str, fields: dict[str, Any]) -> RecordT:
        """
        Merge fields into an existing record and refresh updated_at.

        Raises:
            NotFoundError: If the record does not exist
        """
        current = self.get(record_id)
        if current is None:
            raise NotFoundError(f"{self.PREFIX.capitalize()} {record_id} not found")

        merged = self.MODEL.model_validate({
            **current.model_dump(),
            **fields,
            "id": current.id,
            "created_at": current.created_at,
            "updated_at": now_utc(),
        })

        self._save(merged)
        self._index_upsert(merged)

        return merged

    def get(self, record_id: str) -> RecordT | None:
        """
        Get record by id.

        Returns None when missing. Never raises for absence; unreadable
        documents are logged and treated as missing.
        """
        try:
            data = self.blobs.get_json(self.record_key(record_id))
        except ValueError as e:
            logger.warning(f"Unreadable {self.PREFIX} {record_id}: {e}")
            return None

        if data is None:
            return None

        try:
            return self.MODEL.model_validate(data)
        except ValueError as e:
            logger.warning(f"Invalid {self.PREFIX} document {record_id}: {e}")
            return None

    def delete(self, record_id: str) -> bool:
        """
        Delete the record, then its index entry.

        Returns True if either the record or a stale index entry was removed,
        False if nothing existed. Safe to call repeatedly.
        """
        record_removed = self.blobs.delete(self.record_key(record_id))
        index_removed = self._index_remove(record_id)

        if record_removed or index_removed:
            logger.info(f"Deleted {self.PREFIX} {record_id}")
            return True
        return False

    def list_all(self) -> list[RecordT]:
        """All indexed records that still exist, newest first."""
        records = []
        for entry in self.read_index():
            record = self.get(entry["id"])
            if record is not None:
                records.append(record)

        records.sort(key=self.sort_key, reverse=True)
        return records

    def resolve(self, entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Resolve index entries to full records as JSON dicts.

        Entries whose record is missing resolve to the entry itself.
        """
        resolved = []
        for entry in entries:
            record = self.get(entry["id"])
            resolved.append(record.model_dump(mode="json") if record is not None else entry)
        return resolved
