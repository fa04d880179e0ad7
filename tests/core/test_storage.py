"""Tests for blob store backends and backend selection."""

from unittest.mock import Mock

import pytest

from clients.postgres_client import PostgresClient
from core.config import SiteConfig
from core.exceptions import ConfigurationError
from core.storage import MemoryBlobStore, PostgresBlobStore, build_blob_store


class TestMemoryBlobStore:

    def test_get_missing_returns_none(self):
        assert MemoryBlobStore().get_json("nope") is None

    def test_set_then_get(self):
        store = MemoryBlobStore()
        store.set_json("k", {"a": 1})
        assert store.get_json("k") == {"a": 1}

    def test_returned_values_are_copies(self):
        store = MemoryBlobStore()
        store.set_json("k", {"items": [1]})

        value = store.get_json("k")
        value["items"].append(2)

        assert store.get_json("k") == {"items": [1]}

    def test_stored_values_are_copies(self):
        store = MemoryBlobStore()
        original = [{"id": "a"}]
        store.set_json("k", original)
        original.append({"id": "b"})

        assert store.get_json("k") == [{"id": "a"}]

    def test_delete_reports_whether_key_existed(self):
        store = MemoryBlobStore()
        store.set_json("k", {})
        assert store.delete("k") is True
        assert store.delete("k") is False


class TestPostgresBlobStore:

    @pytest.fixture
    def postgres(self):
        return Mock(spec=PostgresClient)

    def test_rejects_unsafe_table_name(self, postgres):
        with pytest.raises(ValueError, match="table"):
            PostgresBlobStore(postgres, table="blobs; DROP TABLE x")

    def test_get_returns_value_column(self, postgres):
        postgres.execute_single.return_value = {"value": {"id": "a"}}
        store = PostgresBlobStore(postgres)

        assert store.get_json("valuation:a") == {"id": "a"}
        query, params = postgres.execute_single.call_args[0]
        assert "FROM blobs" in query
        assert params == ("valuation:a",)

    def test_get_missing_returns_none(self, postgres):
        postgres.execute_single.return_value = None
        assert PostgresBlobStore(postgres).get_json("x") is None

    def test_set_upserts(self, postgres):
        store = PostgresBlobStore(postgres)
        store.set_json("k", {"a": 1})

        query = postgres.execute_returning.call_args[0][0]
        assert "ON CONFLICT (key) DO UPDATE" in query

    def test_delete_true_when_row_returned(self, postgres):
        postgres.execute_returning.return_value = [{"key": "k"}]
        assert PostgresBlobStore(postgres).delete("k") is True

    def test_delete_false_when_nothing_returned(self, postgres):
        postgres.execute_returning.return_value = []
        assert PostgresBlobStore(postgres).delete("k") is False

    def test_ensure_schema_creates_table(self, postgres):
        PostgresBlobStore(postgres).ensure_schema()
        assert "CREATE TABLE IF NOT EXISTS blobs" in postgres.execute.call_args[0][0]


class TestBuildBlobStore:

    def test_memory_by_default(self):
        assert isinstance(build_blob_store(SiteConfig()), MemoryBlobStore)

    def test_valkey_requires_url(self):
        with pytest.raises(ConfigurationError, match="VALKEY_URL"):
            build_blob_store(SiteConfig(storage_backend="valkey"))

    def test_postgres_requires_url(self):
        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            build_blob_store(SiteConfig(storage_backend="postgres"))

    def test_memory_in_production_warns(self, caplog):
        with caplog.at_level("WARNING", logger="core.storage"):
            build_blob_store(SiteConfig(environment="production"))
        assert "in-memory" in caplog.text
