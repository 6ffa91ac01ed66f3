from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for the container's resolved-component cache.

    Pass one of these values as ``Container(lock_mode=...)``. Wiring itself is
    single-threaded; the lock only guards cache writes made by concurrent
    ``get`` calls after ``autowire`` has returned.
    """

    THREAD = "thread"
    """Guard cache writes with ``threading.Lock``."""

    NONE = "none"
    """Disable locking for single-threaded programs."""
