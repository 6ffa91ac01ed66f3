from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import os
import pkgutil
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from compwire._internal.type_checks import is_runtime_class
from compwire.exceptions import CompwireInvalidDeclarationError, CompwireScanError

logger = logging.getLogger(__name__)

_SCANNED_MODULE_PREFIX = "_compwire_scan"


@runtime_checkable
class DiscoverySource(Protocol):
    """Yield candidate types for ``Container.autowire`` to inspect.

    Candidates without a component declaration are ignored by the container, so
    a source may yield every class it sees.
    """

    def candidates(self) -> Iterable[object]: ...


ScanTarget = DiscoverySource | ModuleType | str | os.PathLike[str]


def _module_classes(module: ModuleType) -> Iterator[type[Any]]:
    exported = getattr(module, "__all__", None)
    if exported is not None:
        for name in exported:
            value = getattr(module, name, None)
            if is_runtime_class(value):
                yield value
        return
    for value in list(vars(module).values()):
        if is_runtime_class(value) and value.__module__ == module.__name__:
            yield value


def _import(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        msg = f"Could not import module {module_name!r} while scanning."
        raise CompwireScanError(msg) from exc


@dataclass(frozen=True, slots=True)
class ModuleSource:
    """Scan a module, and its submodules when it is a package.

    Only classes defined in each module are yielded, unless the module declares
    ``__all__``, in which case exactly the exported classes are.
    """

    module: ModuleType | str
    recursive: bool = True

    def candidates(self) -> Iterator[type[Any]]:
        module = _import(self.module) if isinstance(self.module, str) else self.module
        yield from self._scan(module)
        package_path = getattr(module, "__path__", None)
        if not self.recursive or package_path is None:
            return
        for info in pkgutil.walk_packages(package_path, prefix=f"{module.__name__}."):
            yield from self._scan(_import(info.name))

    @staticmethod
    def _scan(module: ModuleType) -> Iterator[type[Any]]:
        logger.debug("Scanning module %s", module.__name__)
        yield from _module_classes(module)


@dataclass(frozen=True, slots=True)
class DirectorySource:
    """Load every ``*.py`` file below a directory and yield its classes.

    Files are loaded by location, so the directory does not need to be on
    ``sys.path``. Loaded modules are kept in ``sys.modules`` under a name derived
    from the file path, which makes repeated scans return the same classes.
    """

    path: Path

    def candidates(self) -> Iterator[type[Any]]:
        root = Path(self.path).resolve()
        if not root.is_dir():
            msg = f"Scan path {str(root)!r} is not a directory."
            raise CompwireScanError(msg)
        for file_path in sorted(root.rglob("*.py")):
            relative = file_path.relative_to(root)
            if "__pycache__" in relative.parts or file_path.name.startswith("__"):
                continue
            module = self._load(root, file_path)
            logger.debug("Scanning file %s", file_path)
            yield from _module_classes(module)

    @staticmethod
    def _load(root: Path, file_path: Path) -> ModuleType:
        digest = hashlib.sha1(str(root).encode(), usedforsecurity=False).hexdigest()[:10]
        stem = "_".join(file_path.relative_to(root).with_suffix("").parts)
        module_name = f"{_SCANNED_MODULE_PREFIX}_{digest}_{stem}"
        loaded = sys.modules.get(module_name)
        if loaded is not None:
            return loaded

        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            msg = f"Could not create module spec for {file_path}"
            raise CompwireScanError(msg)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            del sys.modules[module_name]
            msg = f"Could not load {file_path} while scanning."
            raise CompwireScanError(msg) from exc
        return module


class ClassSource:
    """Yield an explicit list of classes."""

    def __init__(self, *classes: type[Any]) -> None:
        self.classes = classes

    def candidates(self) -> tuple[type[Any], ...]:
        return self.classes

    def __repr__(self) -> str:
        names = ", ".join(cls.__name__ for cls in self.classes)
        return f"ClassSource({names})"


def as_discovery_source(target: object) -> DiscoverySource:
    """Normalize a ``scans`` item into a discovery source.

    Strings naming an existing directory and path-like objects become a
    ``DirectorySource``; other strings are treated as dotted module names.

    Raises:
        CompwireInvalidDeclarationError: If the target type is not supported.

    """
    if isinstance(target, DiscoverySource):
        return target
    if isinstance(target, ModuleType):
        return ModuleSource(target)
    if isinstance(target, os.PathLike):
        return DirectorySource(Path(target))
    if isinstance(target, str):
        if Path(target).is_dir():
            return DirectorySource(Path(target))
        return ModuleSource(target)
    msg = f"Unsupported scan source {target!r}."
    raise CompwireInvalidDeclarationError(msg)


__all__ = [
    "ClassSource",
    "DirectorySource",
    "DiscoverySource",
    "ModuleSource",
    "ScanTarget",
    "as_discovery_source",
]
