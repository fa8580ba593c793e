"""Initialization script for the embedded store.

Applied on every open, so every statement must be safe to re-run against an
already-initialized database (CREATE ... IF NOT EXISTS). Schema versioning is
not handled here.
"""

from __future__ import annotations

import sqlite3

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    username TEXT PRIMARY KEY,
    password_hash TEXT NOT NULL,
    salt TEXT NOT NULL,
    permissions INTEGER NOT NULL
);
"""


def init_schema(conn: sqlite3.Connection, script: str = SCHEMA_SQL) -> None:
    """Run the initialization script on conn and commit. Raises sqlite3.Error on failure."""
    conn.executescript(script)
    conn.commit()
