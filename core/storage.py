"""
Blob storage backends for record stores.

A blob store maps string keys to JSON documents. Record stores keep each
full record under its own key and a denormalized index under a second key.
The two writes are not transactional on any backend here; record stores
tolerate the gap (see core.services.record_store).

Backends:
- MemoryBlobStore: process-local dict, used by tests and local development
- ValkeyClient: Valkey/Redis (clients.valkey_client)
- PostgresBlobStore: a single JSONB table
"""

import copy
import logging
import threading
from typing import Protocol

from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from core.config import SiteConfig
from core.exceptions import ConfigurationError
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Key to JSON document storage. Last write wins."""

    def get_json(self, key: str) -> dict | list | None:
        ...

    def set_json(self, key: str, value: dict | list) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...


class MemoryBlobStore:
    """
    In-process blob store.

    Values are deep-copied on the way in and out so callers can never
    mutate stored state by accident.
    """

    def __init__(self):
        self._data: dict[str, dict | list] = {}
        self._lock = threading.Lock()

    def get_json(self, key: str) -> dict | list | None:
        with self._lock:
            value = self._data.get(key)
            return copy.deepcopy(value) if value is not None else None

    def set_json(self, key: str, value: dict | list) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())


class PostgresBlobStore:
    """Blob store backed by a single JSONB table."""

    def __init__(self, postgres: PostgresClient, table: str = "blobs"):
        if not table.isidentifier():
            raise ValueError(f"Invalid table name '{table}'")
        self.postgres = postgres
        self.table = table

    def ensure_schema(self) -> None:
        """Create the blobs table if missing."""
        self.postgres.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                key TEXT PRIMARY KEY,
                value JSONB NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL
            )
            """
        )

    def get_json(self, key: str) -> dict | list | None:
        row = self.postgres.execute_single(
            f"SELECT value FROM {self.table} WHERE key = %s",
            (key,)
        )
        if row is None:
            return None
        return row["value"]

    def set_json(self, key: str, value: dict | list) -> None:
        self.postgres.execute_returning(
            f"""
            INSERT INTO {self.table} (key, value, updated_at)
            VALUES (%s, %s, %s)
            ON CONFLICT (key) DO UPDATE
            SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
            RETURNING key
            """,
            (key, Json(value), now_utc())
        )

    def delete(self, key: str) -> bool:
        rows = self.postgres.execute_returning(
            f"DELETE FROM {self.table} WHERE key = %s RETURNING key",
            (key,)
        )
        return len(rows) > 0


def build_blob_store(config: SiteConfig) -> BlobStore:
    """
    Construct the blob store selected by configuration.

    Raises:
        ConfigurationError: If the selected backend has no connection URL.
    """
    if config.storage_backend == "valkey":
        if not config.valkey_url:
            raise ConfigurationError("VALKEY_URL is required for the valkey storage backend")
        from clients.valkey_client import ValkeyClient

        return ValkeyClient(config.valkey_url)

    if config.storage_backend == "postgres":
        if not config.database_url:
            raise ConfigurationError("DATABASE_URL is required for the postgres storage backend")
        store = PostgresBlobStore(PostgresClient(config.database_url))
        store.ensure_schema()
        return store

    if config.is_production:
        logger.warning("Using in-memory storage in production - data will not survive restarts")
    return MemoryBlobStore()
