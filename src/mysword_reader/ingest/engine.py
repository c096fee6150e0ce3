"""SQLite engine setup and the read-only module database handle."""

import logging
import sqlite3
import threading
from dataclasses import dataclass
from typing import Any, Sequence

from mysword_reader.errors import LoadError, MySwordError, QueryError

logger = logging.getLogger(__name__)

_engine_lock = threading.Lock()
_engine: "EngineInfo | None" = None


@dataclass(frozen=True)
class EngineInfo:
    """Facts about the SQLite runtime, captured once per process."""

    sqlite_version: str
    threadsafety: int


def init_engine() -> EngineInfo:
    """
    Initialize the relational engine once for the whole process.

    Safe to call repeatedly and from several threads; later calls return
    the first result.
    """
    global _engine

    if _engine is not None:
        return _engine

    with _engine_lock:
        if _engine is None:
            if not hasattr(sqlite3.Connection, "deserialize"):
                raise MySwordError(
                    f"SQLite {sqlite3.sqlite_version} cannot open databases from memory"
                )
            _engine = EngineInfo(
                sqlite_version=sqlite3.sqlite_version,
                threadsafety=sqlite3.threadsafety,
            )
            logger.debug("SQLite engine ready (version %s)", _engine.sqlite_version)

    return _engine


def is_engine_initialized() -> bool:
    """Check whether init_engine() has completed."""
    return _engine is not None


def quote_identifier(name: str) -> str:
    """Quote a table or column name for use in SQL text."""
    return '"' + name.replace('"', '""') + '"'


class ModuleDatabase:
    """
    Read-only handle on one in-memory module database.

    Calls are serialized by a per-handle lock, so a handle may be shared
    between threads. Engine failures surface as QueryError.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self._lock = threading.RLock()
        self._closed = False

    @classmethod
    def from_bytes(cls, data: bytes) -> "ModuleDatabase":
        """
        Open an exact in-memory copy of a database file.

        Raises:
            LoadError: if the bytes are not a SQLite database
        """
        init_engine()

        if not data:
            raise LoadError("Module file is empty")

        conn = sqlite3.connect(":memory:", check_same_thread=False)
        try:
            conn.deserialize(bytes(data))
            # Deserializing does not validate; the first read does
            conn.execute("SELECT name FROM sqlite_master").fetchall()
            conn.execute("PRAGMA query_only = ON")
        except sqlite3.Error as e:
            conn.close()
            raise LoadError(f"Not a module database: {e}") from e

        return cls(conn)

    @property
    def closed(self) -> bool:
        return self._closed

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[tuple]:
        """Run a read query with bound parameters and return all rows."""
        with self._lock:
            if self._closed:
                raise QueryError("Module database is closed")
            try:
                return self._conn.execute(sql, tuple(params)).fetchall()
            except sqlite3.Error as e:
                raise QueryError(str(e)) from e

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> tuple | None:
        """Run a read query and return its first row, if any."""
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def table_names(self) -> list[str]:
        """Names of all tables, as stored in the catalog."""
        rows = self.query("SELECT name FROM sqlite_master WHERE type = 'table'")
        return [row[0] for row in rows]

    def column_names(self, table: str) -> list[str]:
        """Column names of a table, or an empty list if it does not exist."""
        rows = self.query(f"PRAGMA table_info({quote_identifier(table)})")
        return [row[1] for row in rows]

    def to_bytes(self) -> bytes:
        """Serialize the database back to file bytes."""
        with self._lock:
            if self._closed:
                raise QueryError("Module database is closed")
            try:
                return self._conn.serialize()
            except sqlite3.Error as e:
                raise QueryError(str(e)) from e

    def close(self) -> None:
        with self._lock:
            if not self._closed:
                self._conn.close()
                self._closed = True

    def __enter__(self) -> "ModuleDatabase":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
