"""SQLite store bootstrap: open (creating if absent) and apply the initialization script."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from canvasd.errors import FilesystemError, PreconditionError, StoreInitError, StoreOpenError
from canvasd.storage.schema import SCHEMA_SQL, init_schema

logger = logging.getLogger(__name__)


class SQLiteStore:
    """One open connection to a single-file SQLite database whose schema is in place."""

    def __init__(self, path: Path, conn: sqlite3.Connection) -> None:
        self._path = path
        self._conn: sqlite3.Connection | None = conn

    @classmethod
    def from_path(cls, path: Path | str) -> SQLiteStore:
        """
        Open the database at path and run the initialization script.

        Raises PreconditionError for an empty path (before touching the
        filesystem), FilesystemError if the file cannot be created,
        StoreOpenError if the connection cannot be opened,
        and StoreInitError if the script fails. Parent directories are not
        created.
        """
        if not str(path):
            raise PreconditionError("Database path cannot be empty")
        db_path = Path(path)

        # An empty file opens as an empty database
        if not db_path.exists():
            try:
                db_path.touch()
            except OSError as exc:
                raise FilesystemError(
                    f"Failed to create database file {db_path}: {exc}",
                    path=db_path,
                    step="create file",
                ) from exc
            logger.info("Created database file %s", db_path)

        logger.debug("Opening database %s", db_path)
        try:
            conn = sqlite3.connect(str(db_path))
        except sqlite3.Error as exc:
            raise StoreOpenError(
                f"Failed to open database {db_path}: {exc}", path=db_path
            ) from exc
        conn.row_factory = sqlite3.Row

        try:
            init_schema(conn, SCHEMA_SQL)
        except sqlite3.Error as exc:
            conn.close()
            raise StoreInitError(
                f"Failed to initialize database {db_path}: {exc}", path=db_path
            ) from exc
        return cls(db_path, conn)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreOpenError(f"Database {self._path} is closed", path=self._path)
        return self._conn

    def tables(self) -> list[str]:
        """Names of user tables, sorted."""
        rows = self.connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
        return [row["name"] for row in rows]

    def table_columns(self, table: str) -> list[str]:
        """Column names of table in declaration order; empty if the table does not exist."""
        rows = self.connection.execute(
            "SELECT name FROM pragma_table_info(?) ORDER BY cid", (table,)
        ).fetchall()
        return [row["name"] for row in rows]

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SQLiteStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def open_store(path: Path | str) -> SQLiteStore:
    """Open (creating if absent) and initialize the store at path."""
    return SQLiteStore.from_path(path)
