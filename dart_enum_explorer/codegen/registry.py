"""
Operation registry for the enum code generator.

Every generated shape is an OperationKind. The registry maps each kind to
its metadata (titles, container suffix, code action kind, generator method)
and resolves the names users type on the command line.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class OperationKind(Enum):
    """The fixed set of fragments the generator can produce."""

    WHEN = "when"
    MAYBE_WHEN = "maybe_when"
    WHEN_OR_NULL = "when_or_null"
    MAP = "map"
    MAYBE_MAP = "maybe_map"
    MAP_WITH_VALUES = "map_with_values"
    GETTERS = "getters"
    EXTENSION = "extension"


@dataclass(frozen=True)
class OperationSpec:
    """Metadata describing one operation."""

    kind: OperationKind
    title: str
    suffix: str
    action_kind: str
    method_name: str
    template_name: str
    description: str = ""

    def action_title(self, exists: bool = False) -> str:
        """Title of the code action: ``Generate when()`` or ``Regenerate when()``."""
        verb = "Regenerate" if exists else "Generate"
        return f"{verb} {self.title}"


ACTION_KIND_PREFIX = "refactor.dart-enum"

DEFAULT_OPERATIONS = [
    OperationSpec(
        OperationKind.WHEN,
        "when()",
        "WhenMethod",
        f"{ACTION_KIND_PREFIX}.when",
        "when_method",
        "when.dart",
        "Exhaustive dispatch with a required callback per value",
    ),
    OperationSpec(
        OperationKind.MAYBE_WHEN,
        "maybeWhen()",
        "MaybeWhenMethod",
        f"{ACTION_KIND_PREFIX}.maybeWhen",
        "maybe_when_method",
        "maybe_when.dart",
        "Partial dispatch with optional callbacks and a required orElse",
    ),
    OperationSpec(
        OperationKind.WHEN_OR_NULL,
        "whenOrNull()",
        "WhenOrNullMethod",
        f"{ACTION_KIND_PREFIX}.whenOrNull",
        "when_or_null_method",
        "when_or_null.dart",
        "Partial dispatch returning null for missing callbacks",
    ),
    OperationSpec(
        OperationKind.MAP,
        "map()",
        "MapMethod",
        f"{ACTION_KIND_PREFIX}.map",
        "map_method",
        "map.dart",
        "Exhaustive void dispatch",
    ),
    OperationSpec(
        OperationKind.MAYBE_MAP,
        "maybeMap()",
        "MaybeMapMethod",
        f"{ACTION_KIND_PREFIX}.maybeMap",
        "maybe_map_method",
        "maybe_map.dart",
        "Partial void dispatch",
    ),
    OperationSpec(
        OperationKind.MAP_WITH_VALUES,
        "mapWithValues()",
        "MapWithValuesMethod",
        f"{ACTION_KIND_PREFIX}.mapWithValues",
        "map_with_values_method",
        "map_with_values.dart",
        "Static map literal from value names to caller-supplied values",
    ),
    OperationSpec(
        OperationKind.GETTERS,
        "'is' getters",
        "Getters",
        f"{ACTION_KIND_PREFIX}.getters",
        "getter_methods",
        "getters.dart",
        "One boolean isValue getter per value",
    ),
    OperationSpec(
        OperationKind.EXTENSION,
        "enum extension",
        "X",
        f"{ACTION_KIND_PREFIX}.extension",
        "extension_block",
        "extension.dart",
        "Getters, when, maybeWhen and whenOrNull in one extension",
    ),
]

DEFAULT_ALIASES = {
    OperationKind.GETTERS: ["is", "is-getters"],
    OperationKind.MAP_WITH_VALUES: ["to-map-with-values"],
    OperationKind.EXTENSION: ["ext"],
}


def normalize_name(name: str) -> str:
    """Fold ``maybeWhen``, ``maybe-when``, ``maybe_when()`` to one key."""
    return re.sub(r"[\s_\-()]", "", name).lower()


class OperationRegistry:
    """Registry of operations and their user-facing names."""

    def __init__(self):
        """Initialize empty registry."""
        self._operations: Dict[OperationKind, OperationSpec] = {}
        self._names: Dict[str, OperationKind] = {}

    def register(
        self,
        spec: OperationSpec,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an operation.

        Args:
            spec: Operation metadata
            aliases: Alternative names for this operation
            replace: If True, replace an existing registration. If False, skip if exists.

        Raises:
            RegistryError: If an alias already points at another operation
        """
        if spec.kind in self._operations and not replace:
            return

        names = [spec.kind.value, spec.method_name] + list(aliases or [])
        keys = [normalize_name(name) for name in names]

        for name, key in zip(names, keys):
            owner = self._names.get(key)
            if owner is not None and owner != spec.kind:
                raise RegistryError(
                    f"Alias '{name}' already points to '{owner.value}'"
                )

        self._operations[spec.kind] = spec
        for key in keys:
            self._names[key] = spec.kind

    def unregister(self, kind: OperationKind):
        """Unregister an operation and its aliases."""
        self._operations.pop(kind, None)
        for key in [k for k, target in self._names.items() if target == kind]:
            del self._names[key]

    def resolve(self, name: Union[str, OperationKind]) -> OperationKind:
        """
        Resolve a user-supplied name to an operation kind.

        Raises:
            RegistryError: If the name is unknown
        """
        if isinstance(name, OperationKind):
            if name in self._operations:
                return name
        else:
            kind = self._names.get(normalize_name(name))
            if kind is not None:
                return kind

        available = ", ".join(kind.value for kind in self.list_operations())
        raise RegistryError(f"Unknown operation: {name}. Available: {available}")

    def get_spec(self, name: Union[str, OperationKind]) -> OperationSpec:
        """Get the metadata for an operation by kind or name."""
        return self._operations[self.resolve(name)]

    def list_operations(self) -> List[OperationKind]:
        """Registered operations in declaration order."""
        return [kind for kind in OperationKind if kind in self._operations]

    def get_aliases(self, kind: OperationKind) -> List[str]:
        """All normalized names that resolve to ``kind``, excluding its own."""
        primary = normalize_name(kind.value)
        return sorted(
            key for key, target in self._names.items()
            if target == kind and key != primary
        )

    def is_supported(self, name: str) -> bool:
        """Check if a name resolves to a registered operation."""
        return normalize_name(name) in self._names


# Global registry instance - created once
_global_registry: Optional[OperationRegistry] = None


def get_registry() -> OperationRegistry:
    """Get the global operation registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = create_default_registry()
    return _global_registry


def create_default_registry() -> OperationRegistry:
    """Build a registry holding the built-in operations."""
    registry = OperationRegistry()
    for spec in DEFAULT_OPERATIONS:
        registry.register(spec, aliases=DEFAULT_ALIASES.get(spec.kind))
    return registry


def resolve_operation(name: Union[str, OperationKind]) -> OperationKind:
    """Resolve an operation name using the global registry."""
    return get_registry().resolve(name)


def list_operations() -> List[OperationKind]:
    """List all operations from the global registry."""
    return get_registry().list_operations()
