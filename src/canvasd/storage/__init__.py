"""Embedded store: SQLite bootstrap, initialization script, and record models."""

from canvasd.storage.models import User
from canvasd.storage.schema import SCHEMA_SQL, init_schema
from canvasd.storage.sqlite import SQLiteStore, open_store

__all__ = [
    "SCHEMA_SQL",
    "SQLiteStore",
    "User",
    "init_schema",
    "open_store",
]
