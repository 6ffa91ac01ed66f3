from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from compwire.clues import Clue


class CompwireError(Exception):
    """Represent a base class for all compwire-specific failures.

    Catch this type when you want to handle any compwire error path without
    matching each concrete exception class individually.
    """


class CompwireAlreadyWiredError(CompwireError):
    """Signal a second call to ``Container.autowire``.

    A container is wired exactly once. Create a new ``Container`` when a test
    or a tool needs a differently wired graph.
    """


class CompwireDuplicateComponentError(CompwireError):
    """Signal that two registrations share a component name.

    Raised by ``Container.autowire`` when a built-in component and a scanned
    component, or two scanned components, resolve to the same name.

    Typical fixes include passing an explicit name to ``@component("...")`` or
    scanning each module only once.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate component name: {name!r}")


class CompwireComponentNotResolvedError(CompwireError):
    """Signal that no registered component matches a requested name or type.

    Typical fixes include declaring the class with ``@component``, adding the
    module that defines it to ``scans``, or supplying a ready-made instance
    through ``components``.
    """

    def __init__(self, clue: Clue) -> None:
        self.clue = clue
        super().__init__(f"Can not resolve component: {clue.describe()}")


class CompwireAmbiguousComponentError(CompwireError):
    """Signal that several components match a requested base type.

    Raised during type-based lookup when more than one registered concrete type
    is the requested type or a subtype of it.

    Typical fix is switching the lookup to a component name, for example
    ``autowired("primary_db")`` instead of ``autowired(Database)``.
    """

    def __init__(self, requested: type[Any], matched_names: tuple[str, ...]) -> None:
        self.requested = requested
        self.matched_names = matched_names
        super().__init__(
            f'Multiple components found for "{requested.__name__}": {", ".join(matched_names)}',
        )


class CompwireCircularDependencyError(CompwireError):
    """Signal that a construction chain revisits a component under construction.

    Only transient components can form a cycle: singletons are returned as-is
    once created, so routing one edge of the cycle through a singleton breaks it.
    """

    def __init__(self, name: str, chain: tuple[str, ...]) -> None:
        self.name = name
        self.chain = chain
        super().__init__(
            f"Circular dependency detected: {' -> '.join((*chain, name))}",
        )


class CompwireInvalidDeclarationError(CompwireError):
    """Signal invalid component or autowire declaration arguments.

    Raised by ``@component``, ``autowired`` and their explicit counterparts, and
    by ``Container.autowire`` when a scan source has an unsupported type.
    """


class CompwireScanError(CompwireError):
    """Signal that a discovery source failed to import a module.

    The original import error is chained as ``__cause__``.
    """
