from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from compwire.exceptions import CompwireDuplicateComponentError

logger = logging.getLogger(__name__)


class ComponentOrigin(Enum):
    """Record where a registry entry came from."""

    BUILT_IN = "built_in"
    """Ready-made instance supplied through ``components``."""

    DISCOVERED = "discovered"
    """Declared class yielded by a discovery source."""


@dataclass(slots=True)
class RegistryEntry:
    """Hold one registered component.

    ``instance`` is meaningful only when ``singleton`` is true. Built-in entries
    record ``type(instance)`` as ``concrete_type`` so they take part in
    type-based lookup, but that type is never called.
    """

    name: str
    concrete_type: type[Any]
    origin: ComponentOrigin
    options: Mapping[str, Any] | None = None
    singleton: bool = False
    instance: Any = None

    @classmethod
    def built_in(cls, name: str, instance: Any) -> RegistryEntry:
        return cls(
            name=name,
            concrete_type=type(instance),
            origin=ComponentOrigin.BUILT_IN,
            singleton=True,
            instance=instance,
        )


class Registry:
    """Map component names to entries.

    Append-only: entries are never removed or replaced. Iteration follows
    insertion order, which keeps type-based matching deterministic.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def register(self, entry: RegistryEntry) -> None:
        """Insert an entry.

        Raises:
            CompwireDuplicateComponentError: If the name is already registered.

        """
        self.ensure_available(entry.name)
        self._entries[entry.name] = entry
        logger.debug(
            "Registered component %r (%s, %s)",
            entry.name,
            entry.origin.value,
            "singleton" if entry.singleton else "transient",
        )

    def ensure_available(self, name: str) -> None:
        if name in self._entries:
            raise CompwireDuplicateComponentError(name)

    def lookup(self, name: str) -> RegistryEntry | None:
        return self._entries.get(name)

    def entries(self) -> tuple[RegistryEntry, ...]:
        return tuple(self._entries.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ComponentOrigin", "Registry", "RegistryEntry"]
