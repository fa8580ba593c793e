"""Data models for storage (User) matching the users table."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A user account row. Declared for upcoming authentication; nothing reads or writes it yet."""

    username: str  # Unique (primary key)
    password_hash: str
    salt: str
    permissions: int = 0  # 16-bit permission bitmask
