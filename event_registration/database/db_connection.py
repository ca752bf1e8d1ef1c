"""
PostgreSQL connection pool.
Provides Database, init_db() and get_db() for use by services.
"""

import atexit
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool
from flask import Flask, current_app


class DatabaseUnavailable(RuntimeError):
    """Raised when a connection is requested but the pool was never opened."""


class Database:
    """
    A shared, thread-safe pool of connections to the events database.

    The pool is opened once at startup and closed at shutdown. Handlers
    borrow a connection for the duration of one request:

        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(...)

    Rows are returned as dictionaries (e.g., {"userId": 1, "email": "..."}).
    """

    def __init__(self, dsn_params: Dict[str, Any], minconn: int = 1, maxconn: int = 10):
        self.dsn_params = dsn_params
        self.minconn = minconn
        self.maxconn = maxconn
        self._pool: Optional[ThreadedConnectionPool] = None
        # ThreadedConnectionPool raises PoolError when exhausted; callers wait here instead
        self._slots = threading.BoundedSemaphore(maxconn)

    @classmethod
    def from_config(cls, config) -> "Database":
        """
        Build a Database from a Flask config mapping.
        """
        dsn_params = {
            "host": config["DB_HOST"],
            "port": config["DB_PORT"],
            "user": config["DB_USER"],
            "password": config["DB_PASSWORD"],
            "dbname": config["DB_NAME"],
            "sslmode": config["DB_SSLMODE"],
            "connect_timeout": config["DB_CONNECT_TIMEOUT"],
        }
        return cls(dsn_params, config["DB_POOL_MIN"], config["DB_POOL_MAX"])

    @property
    def is_open(self) -> bool:
        return self._pool is not None and not self._pool.closed

    def open(self) -> bool:
        """
        Open the connection pool.

        On failure the error is logged and the pool stays unset; requests
        made afterwards fail when they ask for a connection.

        Returns:
            bool: True if the pool is open.
        """
        try:
            self._pool = ThreadedConnectionPool(
                self.minconn,
                self.maxconn,
                cursor_factory=RealDictCursor,
                **self.dsn_params,
            )
        except psycopg2.Error as e:
            logging.error(f"Database connection error: {e}")
            self._pool = None
            return False

        logging.info(
            f"Connected to database {self.dsn_params.get('dbname')} "
            f"on {self.dsn_params.get('host')}"
        )
        return True

    def close(self) -> None:
        """
        Close every pooled connection. Safe to call more than once.
        """
        if self.is_open:
            self._pool.closeall()
            logging.info("Database connection pool closed.")
        self._pool = None

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Borrow a connection for one unit of work.

        Blocks until a connection is free when all `maxconn` are in use.
        Commits when the block exits normally, rolls back when it raises
        (unless the connection is already closed), and always hands the
        connection back to the pool.

        Raises:
            DatabaseUnavailable: If the pool is not open.
        """
        if not self.is_open:
            raise DatabaseUnavailable("Database connection pool is not available")

        with self._slots:
            conn = self._pool.getconn()
            try:
                yield conn
                conn.commit()
            except Exception:
                if not conn.closed:
                    conn.rollback()
                raise
            finally:
                self._pool.putconn(conn)


def init_db(app: Flask) -> Database:
    """
    Create the app's Database, open it if configured to, and register
    it under app.extensions["db"]. The pool is closed at process exit.
    """
    db = Database.from_config(app.config)
    if app.config.get("DB_CONNECT_ON_STARTUP", True):
        db.open()
        atexit.register(db.close)
    app.extensions["db"] = db
    return db


def get_db():
    """
    Returns a pooled connection context for the current application.

    Usage:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(...)

    Raises:
        DatabaseUnavailable: If the app has no open pool.
    """
    db: Optional[Database] = current_app.extensions.get("db")
    if db is None:
        raise DatabaseUnavailable("Database has not been initialised for this app")
    return db.connection()
