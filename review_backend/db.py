from __future__ import annotations

# review_backend/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .config import SCHEMA_PATH, get_config, is_test_env
from .errors import DatabaseInitError, StoreError, translate_errors

logger = logging.getLogger(__name__)


def get_db_path(explicit: str | None = None) -> str:
    """
    Resolve the SQLite file path.
    explicit argument > REVIEW_DB_PATH > test_db_path (under test) > db_path
    """
    cfg = get_config()
    env_path = os.environ.get("REVIEW_DB_PATH")
    if explicit:
        path = explicit
    elif env_path:
        path = env_path
    elif is_test_env() and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    else:
        path = cfg["db_path"]

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def _configure(conn: sqlite3.Connection) -> None:
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")


class Database:
    """
    Process-wide handle on the SQLite store.

    Created once by `open_db` and handed to whatever needs storage access.
    Every `connect()` checks out a fresh connection so callers on different
    threads never share one.
    """

    def __init__(self, path: str, busy_timeout_ms: int = 5000):
        self.path = path
        self.busy_timeout_ms = busy_timeout_ms

    def _open(self) -> sqlite3.Connection:
        # `timeout` is the busy timeout for locked databases
        conn = sqlite3.connect(
            self.path,
            timeout=self.busy_timeout_ms / 1000.0,
            check_same_thread=False,
            isolation_level=None,
        )
        try:
            _configure(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Autocommit connection, closed on exit."""
        conn = self._open()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Connection inside BEGIN; committed when the block exits normally,
        rolled back when it raises.
        """
        conn = self._open()
        try:
            conn.execute("BEGIN")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            try:
                with translate_errors("commit"):
                    conn.commit()
            except StoreError:
                conn.rollback()
                raise
        finally:
            conn.close()


def apply_schema(conn: sqlite3.Connection, schema_path: str = SCHEMA_PATH) -> None:
    with open(schema_path, "r", encoding="utf-8") as f:
        conn.executescript(f.read())


def open_db(path: str | None = None, schema_path: str = SCHEMA_PATH) -> Database:
    """
    Open the store, verify it answers, switch to WAL and apply the schema.
    Raises DatabaseInitError on any failure; callers must not continue without a store.
    """
    try:
        cfg = get_config()
    except (TypeError, ValueError) as e:
        logger.error("invalid configuration: %s", e)
        raise DatabaseInitError(f"invalid configuration: {e}") from e
    try:
        db_path = get_db_path(path)
    except OSError as e:
        logger.error("cannot prepare database directory for '%s': %s", path, e)
        raise DatabaseInitError(f"cannot prepare database directory: {e}") from e

    logger.info("opening database '%s'...", db_path)
    db = Database(db_path, busy_timeout_ms=cfg["busy_timeout_ms"])
    try:
        with db.connect() as conn:
            conn.execute("SELECT 1").fetchone()
            mode = conn.execute("PRAGMA journal_mode = WAL;").fetchone()[0]
            if str(mode).lower() != "wal":
                raise DatabaseInitError(f"could not enable WAL journal mode (got '{mode}')")
            apply_schema(conn, schema_path)
    except DatabaseInitError:
        logger.error("database '%s' failed to initialize", db_path)
        raise
    except (sqlite3.Error, OSError) as e:
        logger.error("database '%s' failed to initialize: %s", db_path, e)
        raise DatabaseInitError(f"cannot initialize database '{db_path}': {e}") from e

    logger.info("database '%s' ready", db_path)
    return db
