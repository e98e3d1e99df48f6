"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so that concurrent callers can
each borrow their own connection from one shared pool.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Iterator

import psycopg2
from psycopg2 import pool

from config import DatabaseConfig
from utils.logger import get_logger

logger = get_logger(__name__)

LIVENESS_SQL = "SELECT NOW();"


class PoolClosedError(RuntimeError):
    """Raised when the pool is closed while a caller is checking out."""


class PoolManager:
    """
    Owns the single connection pool of the process.

    The pool is built lazily on first use, at most once, and handed out
    one checked-out connection at a time. Create one manager at startup
    and pass it to every repository.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        pool_factory: Callable[..., pool.AbstractConnectionPool] = pool.ThreadedConnectionPool,
    ):
        self.config = config
        self._pool_factory = pool_factory
        self._pool: pool.AbstractConnectionPool | None = None
        self._init_lock = threading.Lock()
        self._count_lock = threading.Lock()
        self._owners: dict[int, pool.AbstractConnectionPool] = {}

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    @property
    def in_use(self) -> int:
        """Number of connections currently checked out."""
        return len(self._owners)

    def open(self) -> None:
        """
        Build the pool and verify the server answers.

        Safe to call repeatedly and from many threads: only the first
        caller constructs the pool, the rest wait and reuse it.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        with self._init_lock:
            if self._pool is not None:
                return
            if self.config.dialect:
                logger.debug(f"Ignoring dialect hint {self.config.dialect!r}; pool is PostgreSQL only.")
            candidate = self._pool_factory(
                self.config.pool_min,
                self.config.pool_max,
                **self.config.connect_kwargs(),
            )
            try:
                server_time = self._check_liveness(candidate)
            except Exception as e:
                candidate.closeall()
                logger.error(f"Connection pool liveness check failed: {e}")
                raise
            self._pool = candidate
            logger.info("Connection pool created successfully!")
            logger.info(f"Database server time: {server_time}")

    @staticmethod
    def _check_liveness(candidate: pool.AbstractConnectionPool):
        conn = candidate.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(LIVENESS_SQL)
                row = cur.fetchone()
            conn.commit()
            return row[0] if row else None
        finally:
            candidate.putconn(conn)

    def get_connection(self):
        """
        Get a connection from the pool, building the pool on first call.

        Raises:
            psycopg2.pool.PoolError: If every connection is already checked out.
            PoolClosedError: If the pool was closed while the caller was acquiring.
        """
        self.open()
        current = self._pool
        if current is None:
            raise PoolClosedError("Connection pool was closed before a connection could be checked out.")
        conn = current.getconn()
        with self._count_lock:
            self._owners[id(conn)] = current
        return conn

    def release_connection(self, conn) -> None:
        """
        Return a connection to the pool that handed it out.

        Connections borrowed before close() are dropped, never given to
        a pool built afterwards.
        """
        with self._count_lock:
            owner = self._owners.pop(id(conn), None)
        if owner is None or owner.closed:
            return
        owner.putconn(conn)

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Borrow a connection for one unit of work.

        Commits when the block exits normally, rolls back when it raises,
        and returns the connection to the pool either way.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            # close() may already have shut this connection down.
            if not conn.closed:
                conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        with self._init_lock:
            if self._pool is None:
                return
            self._pool.closeall()
            self._pool = None
            with self._count_lock:
                self._owners.clear()
            logger.info("Database connection pool closed.")
