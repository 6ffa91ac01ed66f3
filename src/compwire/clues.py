from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from compwire._internal.type_checks import is_runtime_class
from compwire.exceptions import CompwireInvalidDeclarationError


@dataclass(frozen=True, slots=True)
class NameClue:
    """Look a component up by its registered name."""

    name: str

    @property
    def cache_key(self) -> str:
        return self.name

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class TypeClue:
    """Look a component up by its type or one of its base types.

    The type's ``__name__`` is tried as a component name first, which is also
    the name a ``@component`` class gets when none is given.
    """

    type: type[Any]

    @property
    def cache_key(self) -> str:
        return self.type.__name__

    def describe(self) -> str:
        return self.type.__name__


Clue = NameClue | TypeClue


def as_clue(value: object) -> Clue:
    """Convert a user-facing ``str | type`` lookup value into a ``Clue``.

    Args:
        value: Component name, class, or an existing clue.

    Returns:
        The matching clue variant.

    Raises:
        CompwireInvalidDeclarationError: If the value is neither a non-empty
            string nor a runtime class.

    """
    if isinstance(value, (NameClue, TypeClue)):
        return value
    if isinstance(value, str):
        if not value:
            msg = "Component name must not be empty."
            raise CompwireInvalidDeclarationError(msg)
        return NameClue(value)
    if is_runtime_class(value):
        return TypeClue(value)
    msg = f"Expected a component name or a class, got {value!r}."
    raise CompwireInvalidDeclarationError(msg)


__all__ = ["Clue", "NameClue", "TypeClue", "as_clue"]
