"""
Naming utilities for generated Dart members.

Handles the getter and extension naming conventions and the Dart keyword
checks used to warn about values that would generate invalid code.
"""

import re
from typing import Dict, List, Sequence

from .model import EnumModel

# Dart reserved words that can never be used as identifiers
DART_RESERVED_WORDS = {
    "assert",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "else",
    "enum",
    "extends",
    "false",
    "final",
    "finally",
    "for",
    "if",
    "in",
    "is",
    "new",
    "null",
    "rethrow",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "var",
    "void",
    "while",
    "with",
}

# Names the generated members declare themselves
GENERATED_PARAMETER_NAMES = {"orElse"}

IDENTIFIER_FRAGMENT_PATTERN = re.compile(r"[A-Za-z0-9_$]*")

GETTER_PREFIX = "is"


def capitalize_first(value: str) -> str:
    """Uppercase the first character if it is an ASCII letter; keep the rest."""
    if value and "a" <= value[0] <= "z":
        return value[0].upper() + value[1:]
    return value


def getter_name(value: str) -> str:
    """Boolean predicate name for an enum value: ``active`` -> ``isActive``."""
    return f"{GETTER_PREFIX}{capitalize_first(value)}"


def extension_name(enum_name: str, suffix: str) -> str:
    """Name of a generated extension block: ``Status`` + ``X`` -> ``StatusX``."""
    return f"{enum_name}{suffix}"


def is_identifier_fragment(value: str) -> bool:
    """Check that a suffix can be appended to a Dart type name."""
    return bool(IDENTIFIER_FRAGMENT_PATTERN.fullmatch(value))


def find_getter_collisions(values: Sequence[str]) -> Dict[str, List[str]]:
    """
    Map getter names to the distinct values that would produce them.

    Only names produced by two or more distinct values are returned, e.g.
    ``active`` and ``Active`` both produce ``isActive``.
    """
    owners: Dict[str, List[str]] = {}
    for value in values:
        names = owners.setdefault(getter_name(value), [])
        if value not in names:
            names.append(value)
    return {name: vals for name, vals in owners.items() if len(vals) > 1}


def check_model_names(model: EnumModel) -> List[str]:
    """Return warnings about names that would make generated code invalid."""
    warnings = []

    for value in model.duplicate_values():
        warnings.append(
            f"Value '{value}' is declared more than once in {model.name}; "
            f"generated switch arms will be duplicated"
        )

    for name, values in find_getter_collisions(model.values).items():
        warnings.append(
            f"Values {', '.join(values)} of {model.name} all map to getter '{name}'"
        )

    for value in model.values:
        if value in DART_RESERVED_WORDS:
            warnings.append(f"Value '{value}' of {model.name} is a Dart reserved word")
        if value in GENERATED_PARAMETER_NAMES:
            warnings.append(
                f"Value '{value}' of {model.name} clashes with the generated "
                f"'{value}' parameter of maybeWhen()"
            )

    return warnings
