from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar, overload

from compwire.clues import Clue, as_clue
from compwire.exceptions import CompwireInvalidDeclarationError

C = TypeVar("C", bound=type[Any])

_COMPONENT_ATTR = "__compwire_component__"
_AUTOWIRED_ATTR = "__compwire_autowired__"


@dataclass(frozen=True, slots=True)
class ComponentDeclaration:
    """Declaration metadata attached to a component class."""

    name: str
    singleton: bool = True
    options: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class AutowireSpec:
    """One injection point declared on a component class."""

    field_name: str
    clue: Clue
    options: Mapping[str, Any] | None = None


class AutowiredField:
    """Class-body marker created by ``autowired``.

    On assignment to a class attribute the marker records an ``AutowireSpec``
    for its owner. The wired value is later stored in the instance ``__dict__``
    and shadows the marker.
    """

    __slots__ = ("clue", "field_name", "options")

    def __init__(self, clue: Clue, options: Mapping[str, Any] | None) -> None:
        self.clue = clue
        self.options = options
        self.field_name: str | None = None

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.field_name = name
        declare_autowired(owner, name, self.clue, self.options)

    def __get__(self, obj: object | None, objtype: type[Any] | None = None) -> Any:
        if obj is None:
            return self
        owner_name = type(obj).__name__
        msg = f"{owner_name}.{self.field_name} has not been autowired yet."
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"autowired({self.clue.describe()!r})"


def _freeze_options(options: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if options is None:
        return None
    if not isinstance(options, Mapping):
        msg = f"Component options must be a mapping, got {type(options).__name__}."
        raise CompwireInvalidDeclarationError(msg)
    return MappingProxyType(dict(options))


def declare_component(
    cls: C,
    name: str | None = None,
    options: Mapping[str, Any] | None = None,
    *,
    singleton: bool = True,
) -> C:
    """Attach a component declaration to ``cls`` without using a decorator.

    Args:
        cls: Class to declare.
        name: Component name; defaults to ``cls.__name__``.
        options: Default keyword arguments passed to ``cls`` on construction.
        singleton: Share one instance when true, build a new one per lookup
            when false.

    Returns:
        ``cls`` itself.

    Raises:
        CompwireInvalidDeclarationError: If ``cls`` is not a class or the name
            or options are invalid.

    """
    if not isinstance(cls, type):
        msg = f"Only classes can be declared as components, got {cls!r}."
        raise CompwireInvalidDeclarationError(msg)
    if name is not None and (not isinstance(name, str) or not name):
        msg = f"Component name must be a non-empty string, got {name!r}."
        raise CompwireInvalidDeclarationError(msg)
    declaration = ComponentDeclaration(
        name=name or cls.__name__,
        singleton=singleton,
        options=_freeze_options(options),
    )
    setattr(cls, _COMPONENT_ATTR, declaration)
    return cls


def declare_autowired(
    cls: type[Any],
    field_name: str,
    clue: str | type[Any] | Clue,
    options: Mapping[str, Any] | None = None,
) -> None:
    """Declare that ``field_name`` on instances of ``cls`` is autowired."""
    specs = cls.__dict__.get(_AUTOWIRED_ATTR)
    if specs is None:
        specs = {}
        setattr(cls, _AUTOWIRED_ATTR, specs)
    specs[field_name] = AutowireSpec(
        field_name=field_name,
        clue=as_clue(clue),
        options=_freeze_options(options),
    )


@overload
def component(
    name: C,
    options: None = None,
    *,
    multiple: bool = False,
) -> C: ...


@overload
def component(
    name: str | None = None,
    options: Mapping[str, Any] | None = None,
    *,
    multiple: bool = False,
) -> Callable[[C], C]: ...


def component(
    name: C | str | None = None,
    options: Mapping[str, Any] | None = None,
    *,
    multiple: bool = False,
) -> C | Callable[[C], C]:
    """Declare a class as a component that discovery sources pick up.

    Components are singletons unless ``multiple=True``, in which case every
    lookup builds and wires a new instance.

    Args:
        name: Component name, or the class itself when used as a bare
            decorator. Defaults to the class ``__name__``.
        options: Default keyword arguments passed to the constructor.
        multiple: Build a new instance per lookup instead of sharing one.

    Returns:
        The class in bare form, or a decorator otherwise.

    Examples:
        .. code-block:: python

            @component
            class Clock: ...


            @component("mailer", {"host": "localhost"}, multiple=True)
            class SmtpMailer:
                def __init__(self, host: str) -> None:
                    self.host = host

    """
    if isinstance(name, type):
        return declare_component(name, options=options, singleton=not multiple)

    def decorator(cls: C) -> C:
        return declare_component(cls, name, options, singleton=not multiple)

    return decorator


def autowired(
    clue: str | type[Any],
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Mark a class attribute to be filled with a resolved component.

    Args:
        clue: Component name, or a type matched against registered components
            and their base classes.
        options: Constructor options used when the resolved component is
            transient.

    Examples:
        .. code-block:: python

            @component
            class Service:
                log: logging.Logger = autowired("logger")
                repo: Repository = autowired(Repository)

    """
    return AutowiredField(as_clue(clue), options)


def get_component_declaration(candidate: object) -> ComponentDeclaration | None:
    """Return the declaration attached directly to ``candidate``.

    Subclasses of a declared component are not components themselves unless
    declared separately.
    """
    if not isinstance(candidate, type):
        return None
    declaration = candidate.__dict__.get(_COMPONENT_ATTR)
    return declaration if isinstance(declaration, ComponentDeclaration) else None


def get_autowire_specs(target: object) -> dict[str, AutowireSpec]:
    """Return the autowire specs of a class or instance keyed by field name.

    Declarations are merged along the MRO so a subclass overrides a base class
    declaration for the same field.
    """
    cls = target if isinstance(target, type) else type(target)
    merged: dict[str, AutowireSpec] = {}
    for klass in reversed(cls.__mro__):
        merged.update(klass.__dict__.get(_AUTOWIRED_ATTR, {}))
    return merged


__all__ = [
    "AutowireSpec",
    "AutowiredField",
    "ComponentDeclaration",
    "autowired",
    "component",
    "declare_autowired",
    "declare_component",
    "get_autowire_specs",
    "get_component_declaration",
]
