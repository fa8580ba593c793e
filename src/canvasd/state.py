"""Shared application state: the live configuration behind an asyncio lock."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator

from canvasd.config import Config


@dataclass
class _Slot:
    config: Config
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class SharedConfig:
    """
    Exclusive-access handle to one Config shared by many async consumers.

    Access goes through ``acquire()`` only; at most one task holds the config
    at a time and waiters are served in arrival order. ``clone()`` returns a
    handle to the same config and lock, not a copy.

    Example:
        shared = SharedConfig(load_config("config.json"))
        async with shared.acquire() as config:
            config.network.port = 8080
    """

    def __init__(self, config: Config | None = None) -> None:
        self._slot = _Slot(config if config is not None else Config())

    @classmethod
    def _from_slot(cls, slot: _Slot) -> SharedConfig:
        handle = cls.__new__(cls)
        handle._slot = slot
        return handle

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Config]:
        """Wait for exclusive access and yield the live config for reading or writing."""
        async with self._slot.lock:
            yield self._slot.config

    async def snapshot(self) -> Config:
        """Deep copy of the config taken under the lock."""
        async with self.acquire() as config:
            return config.model_copy(deep=True)

    def clone(self) -> SharedConfig:
        return self._from_slot(self._slot)

    def same_as(self, other: SharedConfig) -> bool:
        """True if both handles refer to the same underlying config."""
        return self._slot is other._slot

    def locked(self) -> bool:
        return self._slot.lock.locked()


@dataclass
class AppState:
    """State handed to request handlers; clones share the same config."""

    config: SharedConfig

    @classmethod
    def from_config(cls, config: Config) -> AppState:
        return cls(config=SharedConfig(config))

    def clone(self) -> AppState:
        return AppState(config=self.config.clone())
