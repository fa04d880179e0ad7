"""
Valkey (Redis-compatible) blob store.

Each key holds one compact JSON document. Satisfies core.storage.BlobStore.
Connection problems surface as redis exceptions; nothing is retried or
cached locally.
"""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    JSON documents in Valkey.

    Usage:
        store = ValkeyClient("redis://localhost:6379/0")
        store.set_json("valuation:abc", {"id": "abc"})
        store.get_json("valuation:abc")  # None if missing
    """

    def __init__(self, url: str, key_prefix: str = ""):
        """
        Connect and ping.

        Args:
            url: redis:// or rediss:// connection URL
            key_prefix: Namespace prepended to every key so several sites can share a database

        Raises:
            redis.ConnectionError: If the server is unreachable
        """
        self._client = redis.from_url(url, decode_responses=True)
        self._key_prefix = key_prefix
        self._client.ping()
        logger.info(f"Valkey blob store connected (prefix={key_prefix!r})")

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def ping(self) -> bool:
        self._client.ping()
        return True

    def get_json(self, key: str) -> dict | list | None:
        """
        Read one document.

        Raises:
            ValueError: If the stored value is not JSON
        """
        raw = self._client.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key '{key}': {e}") from e

    def set_json(self, key: str, value: dict | list) -> None:
        self._client.set(self._key(key), json.dumps(value, separators=(",", ":")))

    def delete(self, key: str) -> bool:
        """True if the key existed."""
        return self._client.delete(self._key(key)) > 0

    def close(self) -> None:
        self._client.close()
