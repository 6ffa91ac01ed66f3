from compwire.clues import Clue, NameClue, TypeClue
from compwire.container import AutowireOptions, Container
from compwire.exceptions import (
    CompwireAlreadyWiredError,
    CompwireAmbiguousComponentError,
    CompwireCircularDependencyError,
    CompwireComponentNotResolvedError,
    CompwireDuplicateComponentError,
    CompwireError,
    CompwireInvalidDeclarationError,
    CompwireScanError,
)
from compwire.lock_mode import LockMode
from compwire.markers import (
    AutowireSpec,
    ComponentDeclaration,
    autowired,
    component,
    declare_autowired,
    declare_component,
    get_autowire_specs,
    get_component_declaration,
)
from compwire.scanning import ClassSource, DirectorySource, DiscoverySource, ModuleSource

__version__ = "0.1.0"

__all__ = [
    "AutowireOptions",
    "AutowireSpec",
    "ClassSource",
    "Clue",
    "CompwireAlreadyWiredError",
    "CompwireAmbiguousComponentError",
    "CompwireCircularDependencyError",
    "CompwireComponentNotResolvedError",
    "CompwireDuplicateComponentError",
    "CompwireError",
    "CompwireInvalidDeclarationError",
    "CompwireScanError",
    "ComponentDeclaration",
    "Container",
    "DirectorySource",
    "DiscoverySource",
    "LockMode",
    "ModuleSource",
    "NameClue",
    "TypeClue",
    "autowired",
    "component",
    "declare_autowired",
    "declare_component",
    "get_autowire_specs",
    "get_component_declaration",
]
