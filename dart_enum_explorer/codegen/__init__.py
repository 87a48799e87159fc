"""
Dart Enum Code Generation Module

Parses Dart enum declarations and generates companion extension code.
"""

from .registry import (
    OperationKind,
    OperationRegistry,
    OperationSpec,
    RegistryError,
    get_registry,
    list_operations,
    resolve_operation,
)
from .core.model import EnumModel, TextSpan
from .core.parser import FailureKind, ParseFailure, is_failure, parse, parse_all
from .core.generator import (
    EnumCodeGenerator,
    GenerationResult,
    GeneratorError,
    generate_fragment,
)
from .core.config import GeneratorConfig, ConfigError, load_config


def generate_from_source(source, operation="extension", config=None, wrap=True):
    """
    Parse the first enum in ``source`` and generate one operation.

    Args:
        source: Dart source text containing an enum declaration
        operation: Operation kind or name
        config: GeneratorConfig, dict of overrides, or None
        wrap: Wrap single members in their extension container

    Returns:
        GenerationResult; a failed result when the source does not parse
    """
    generator = EnumCodeGenerator(config)
    result = parse(source, allow_duplicates=generator.config.allow_duplicate_values)

    if is_failure(result):
        return GenerationResult.error(str(result))

    return generate_fragment(generator, result, operation, wrap=wrap)


__all__ = [
    "OperationKind",
    "OperationRegistry",
    "OperationSpec",
    "RegistryError",
    "get_registry",
    "list_operations",
    "resolve_operation",
    "EnumModel",
    "TextSpan",
    "FailureKind",
    "ParseFailure",
    "is_failure",
    "parse",
    "parse_all",
    "EnumCodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "generate_fragment",
    "GeneratorConfig",
    "ConfigError",
    "load_config",
    "generate_from_source",
]
