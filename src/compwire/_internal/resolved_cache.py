from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext

from compwire._internal.registry import RegistryEntry
from compwire.lock_mode import LockMode

logger = logging.getLogger(__name__)


class ResolvedCache:
    """Memoize which registry entry satisfied a lookup key.

    Entries are never invalidated: once a key is pinned to an entry, later
    registrations cannot change what that key resolves to.
    """

    def __init__(self, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._resolved: dict[str, RegistryEntry] = {}
        self._lock: AbstractContextManager[object] = (
            threading.Lock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    def get(self, key: str) -> RegistryEntry | None:
        return self._resolved.get(key)

    def pin(self, key: str, entry: RegistryEntry) -> RegistryEntry:
        """Store ``entry`` under ``key`` unless another thread pinned it first.

        Returns:
            The entry now cached under ``key``.

        """
        with self._lock:
            cached = self._resolved.setdefault(key, entry)
        if cached is entry:
            logger.debug("Resolved %r to component %r", key, entry.name)
        return cached

    def __contains__(self, key: object) -> bool:
        return key in self._resolved

    def __len__(self) -> int:
        return len(self._resolved)


__all__ = ["ResolvedCache"]
