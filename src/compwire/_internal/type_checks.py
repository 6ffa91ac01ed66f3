from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_nominal_subtype(candidate: type[Any], requested: type[Any]) -> bool:
    """Return true when ``requested`` appears in the declared ancestry of ``candidate``.

    Walks ``candidate.__mro__`` and compares each ancestor by identity, so a class
    counts as its own subtype. Virtual subclasses registered on an ABC and
    structural ``Protocol`` matches are not considered.

    Args:
        candidate: Concrete type being tested.
        requested: Base type being looked up.

    """
    return any(ancestor is requested for ancestor in candidate.__mro__)


__all__ = ["is_nominal_subtype", "is_runtime_class"]
