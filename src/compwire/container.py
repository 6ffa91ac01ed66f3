from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar, overload

from compwire._internal.cycle_guard import CycleGuard
from compwire._internal.registry import ComponentOrigin, Registry, RegistryEntry
from compwire._internal.resolved_cache import ResolvedCache
from compwire._internal.type_checks import is_runtime_class
from compwire._internal.type_matcher import TypeMatcher
from compwire.clues import Clue, TypeClue, as_clue
from compwire.exceptions import (
    CompwireAlreadyWiredError,
    CompwireComponentNotResolvedError,
    CompwireInvalidDeclarationError,
)
from compwire.lock_mode import LockMode
from compwire.markers import get_autowire_specs, get_component_declaration
from compwire.scanning import ScanTarget, as_discovery_source

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AutowireOptions:
    """Describe what ``Container.autowire`` registers.

    Attributes:
        components: Ready-made instances keyed by component name.
        scans: Discovery sources, modules, dotted module names or directories
            whose declared components are registered.

    """

    components: Mapping[str, Any] = field(default_factory=dict)
    scans: tuple[ScanTarget, ...] = ()


class Container:
    """Register components once, then resolve wired instances by name or type.

    A container is populated by a single ``autowire`` call. Singleton
    components are built and wired during that call; transient components are
    built and wired on every ``get``.

    Each container owns its registry and resolution cache, so independent
    containers never share state.
    """

    def __init__(self, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        """Initialize an empty, unwired container.

        Args:
            lock_mode: Locking strategy for the resolution cache. Keep
                ``LockMode.THREAD`` when ``get`` is called from several threads.

        """
        self._registry = Registry()
        self._resolved = ResolvedCache(lock_mode)
        self._matcher = TypeMatcher(self._registry)
        self._wire_lock = threading.Lock()
        self._wired = False

    @property
    def wired(self) -> bool:
        return self._wired

    def autowire(
        self,
        options: AutowireOptions | None = None,
        *,
        components: Mapping[str, Any] | None = None,
        scans: Iterable[ScanTarget] | None = None,
    ) -> None:
        """Register built-in and discovered components and wire all singletons.

        Pass either an ``AutowireOptions`` value or the ``components``/``scans``
        keywords; keywords extend what ``options`` declares.

        Args:
            options: Wiring configuration.
            components: Ready-made instances keyed by component name.
            scans: Additional scan targets.

        Raises:
            CompwireAlreadyWiredError: If the container was already wired.
            CompwireDuplicateComponentError: If two components share a name.
            CompwireComponentNotResolvedError: If a singleton's autowired field
                cannot be resolved.
            CompwireAmbiguousComponentError: If a type-based field matches
                several components.
            CompwireCircularDependencyError: If wiring a transient dependency
                revisits a component under construction.

        Examples:
            .. code-block:: python

                container = Container()
                container.autowire(
                    components={"logger": logging.getLogger("app")},
                    scans=["myapp.services"],
                )
                service = container.get(Service)

        """
        with self._wire_lock:
            if self._wired:
                msg = "Container.autowire() can only be called once."
                raise CompwireAlreadyWiredError(msg)
            self._wired = True

        options = options or AutowireOptions()
        scan_targets = (*options.scans, *(scans or ()))

        built_in = 0
        for mapping in (options.components, components or {}):
            for name, instance in mapping.items():
                if not isinstance(name, str) or not name:
                    msg = f"Built-in component names must be non-empty strings, got {name!r}."
                    raise CompwireInvalidDeclarationError(msg)
                self._registry.register(RegistryEntry.built_in(name, instance))
                built_in += 1

        for target in scan_targets:
            self._register_discovered(as_discovery_source(target).candidates())

        singletons = [entry for entry in self._registry.entries() if entry.singleton]
        for entry in singletons:
            for spec in get_autowire_specs(entry.instance).values():
                setattr(entry.instance, spec.field_name, self._resolve(spec.clue, spec.options))

        logger.info(
            "Wired %d components (%d built-in, %d singletons)",
            len(self._registry),
            built_in,
            len(singletons),
        )

    def _register_discovered(self, candidates: Iterable[object]) -> None:
        for candidate in candidates:
            if not is_runtime_class(candidate):
                continue
            declaration = get_component_declaration(candidate)
            if declaration is None:
                continue
            self._registry.ensure_available(declaration.name)
            entry = RegistryEntry(
                name=declaration.name,
                concrete_type=candidate,
                origin=ComponentOrigin.DISCOVERED,
                options=declaration.options,
                singleton=declaration.singleton,
            )
            if declaration.singleton:
                entry.instance = self._construct(entry, None)
            self._registry.register(entry)

    @overload
    def get(self, clue: type[T], options: Mapping[str, Any] | None = None) -> T: ...

    @overload
    def get(self, clue: str | Clue, options: Mapping[str, Any] | None = None) -> Any: ...

    def get(self, clue: type[Any] | str | Clue, options: Mapping[str, Any] | None = None) -> Any:
        """Return a component by name or by type.

        Singletons are returned as-is. Transient components are constructed with
        ``options`` (or their declared defaults) and wired recursively.

        Args:
            clue: Component name, or a type matched against registered concrete
                types and their base classes.
            options: Constructor keyword arguments for a transient component.

        Returns:
            The resolved component instance.

        Raises:
            CompwireComponentNotResolvedError: If nothing matches ``clue``.
            CompwireAmbiguousComponentError: If ``clue`` is a type matched by
                several components.
            CompwireCircularDependencyError: If a transient construction chain
                revisits a component under construction.

        """
        return self._resolve(as_clue(clue), options)

    def _resolve(
        self,
        clue: Clue,
        options: Mapping[str, Any] | None,
        guard: CycleGuard | None = None,
    ) -> Any:
        entry = self._lookup(clue)
        if entry.singleton:
            return entry.instance

        instance = self._construct(entry, options)
        specs = get_autowire_specs(instance)
        if not specs:
            return instance

        guard = guard or CycleGuard()
        with guard.constructing(entry.name):
            for spec in specs.values():
                setattr(instance, spec.field_name, self._resolve(spec.clue, spec.options, guard))
        return instance

    def _lookup(self, clue: Clue) -> RegistryEntry:
        key = clue.cache_key
        entry = self._resolved.get(key)
        if entry is not None:
            return entry

        entry = self._registry.lookup(key)
        if entry is None and isinstance(clue, TypeClue):
            entry = self._matcher.match(clue.type)
        if entry is None:
            raise CompwireComponentNotResolvedError(clue)
        return self._resolved.pin(key, entry)

    @staticmethod
    def _construct(entry: RegistryEntry, options: Mapping[str, Any] | None) -> Any:
        kwargs = options if options is not None else entry.options
        logger.debug("Constructing component %r", entry.name)
        if kwargs is None:
            return entry.concrete_type()
        return entry.concrete_type(**kwargs)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def component_names(self) -> tuple[str, ...]:
        """Return registered component names in registration order."""
        return self._registry.names()


__all__ = ["AutowireOptions", "Container"]
