"""
In-memory registry of open import sessions.

Sessions are isolated from each other; each carries its own lock so that all
operations on one session are serialized (single writer) while different
sessions proceed concurrently. Idle sessions expire and the registry is
bounded, evicting the least recently used session when full.
"""

import asyncio
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field

from cachetools import TTLCache

from promptbank.core.import_wizard import Bank, Category, ImportSession

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """No open session with the requested id (unknown, expired or confirmed)."""


@dataclass
class SessionEntry:
    session: ImportSession
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class SessionRegistry:
    def __init__(self, maxsize: int, ttl: float):
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    async def open(
        self,
        categories: Mapping[str, Category],
        existing_banks: Mapping[str, Bank] | None = None,
        raw_text: str = "",
    ) -> tuple[str, SessionEntry]:
        session_id = str(uuid.uuid4())
        entry = SessionEntry(
            session=ImportSession(categories, existing_banks, raw_text=raw_text)
        )
        async with self._lock:
            self._cache[session_id] = entry
        logger.info(f"Opened import session {session_id}")
        return session_id, entry

    async def get(self, session_id: str) -> SessionEntry:
        async with self._lock:
            entry = self._cache.get(session_id)
            if entry is None:
                raise SessionNotFound(session_id)
            # Re-insert to refresh the idle timer.
            self._cache[session_id] = entry
            return entry

    async def discard(self, session_id: str) -> bool:
        async with self._lock:
            removed = self._cache.pop(session_id, None) is not None
        if removed:
            logger.info(f"Discarded import session {session_id}")
        return removed

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()
