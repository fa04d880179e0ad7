"""
Pooled PostgreSQL access for the blob table.

psycopg2 ThreadedConnectionPool, one pool per database URL shared by every
client instance. JSONB columns come back as Python objects.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Tuple

import psycopg2
import psycopg2.extras
import psycopg2.pool

logger = logging.getLogger(__name__)

Params = Tuple | Dict | None


class PostgresClient:
    """
    Runs parameterized statements and returns rows as dicts.

    Usage:
        db = PostgresClient(database_url)
        row = db.execute_single("SELECT value FROM blobs WHERE key = %s", ("lead:1",))
    """

    _connection_pools: Dict[str, psycopg2.pool.ThreadedConnectionPool] = {}
    _pools_lock = threading.RLock()

    def __init__(self, database_url: str, max_connections: int = 10):
        self._database_url = database_url
        self._max_connections = max_connections
        self._pool()

    def _pool(self) -> psycopg2.pool.ThreadedConnectionPool:
        with self._pools_lock:
            pool = self._connection_pools.get(self._database_url)
            if pool is None:
                pool = psycopg2.pool.ThreadedConnectionPool(
                    minconn=1,
                    maxconn=self._max_connections,
                    dsn=self._database_url,
                    connect_timeout=30,
                )
                psycopg2.extras.register_default_jsonb(globally=True)
                self._connection_pools[self._database_url] = pool
                logger.info(f"Postgres pool created (max {self._max_connections} connections)")
            return pool

    @contextmanager
    def connection(self):
        """Borrow a pooled connection; rolled back if the block raises."""
        pool = self._pool()
        conn = pool.getconn()
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        finally:
            pool.putconn(conn)

    def _run(self, query: str, params: Params, returning: bool) -> List[Dict[str, Any]]:
        with self.connection() as conn:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(query, params)
                if cur.description is None:
                    if returning:
                        raise ValueError("Statement has no RETURNING clause")
                    rows = []
                else:
                    rows = [dict(row) for row in cur.fetchall()]
            conn.commit()
            return rows

    def execute(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """Run a statement. Returns its rows, or [] if it produces none."""
        return self._run(query, params, returning=False)

    def execute_single(self, query: str, params: Params = None) -> Dict[str, Any] | None:
        rows = self.execute(query, params)
        return rows[0] if rows else None

    def execute_returning(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """Run a write whose RETURNING clause reports the affected rows."""
        return self._run(query, params, returning=True)

    def close(self) -> None:
        """Close this URL's pool."""
        with self._pools_lock:
            pool = self._connection_pools.pop(self._database_url, None)
            if pool is not None:
                pool.closeall()
