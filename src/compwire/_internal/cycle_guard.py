from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from compwire.exceptions import CompwireCircularDependencyError


class CycleGuard:
    """Track component names under construction within one resolution chain.

    A name stays in the guard while its autowired fields are being resolved and
    is released afterwards, so two siblings sharing a transient dependency are
    not mistaken for a cycle.
    """

    def __init__(self) -> None:
        self._stack: list[str] = []

    @contextmanager
    def constructing(self, name: str) -> Iterator[None]:
        """Mark ``name`` as under construction for the duration of the block.

        Raises:
            CompwireCircularDependencyError: If ``name`` is already under
                construction in this chain.

        """
        if name in self._stack:
            raise CompwireCircularDependencyError(name, tuple(self._stack))
        self._stack.append(name)
        try:
            yield
        finally:
            self._stack.pop()


__all__ = ["CycleGuard"]
