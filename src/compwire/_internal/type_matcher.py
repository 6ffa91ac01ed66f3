from __future__ import annotations

from typing import Any

from compwire._internal.registry import Registry, RegistryEntry
from compwire._internal.type_checks import is_nominal_subtype
from compwire.exceptions import CompwireAmbiguousComponentError


class TypeMatcher:
    """Find the single registry entry whose concrete type satisfies a base type."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def match(self, requested: type[Any]) -> RegistryEntry | None:
        """Return the entry whose concrete type is ``requested`` or a subtype of it.

        Args:
            requested: Base type being looked up.

        Returns:
            The matching entry, or ``None`` when nothing matches.

        Raises:
            CompwireAmbiguousComponentError: If more than one entry matches.

        """
        matched = [
            entry
            for entry in self._registry.entries()
            if is_nominal_subtype(entry.concrete_type, requested)
        ]
        if len(matched) > 1:
            raise CompwireAmbiguousComponentError(
                requested,
                tuple(entry.name for entry in matched),
            )
        return matched[0] if matched else None


__all__ = ["TypeMatcher"]
