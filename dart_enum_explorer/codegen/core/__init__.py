"""
Core code generation components.

Enum model, parser, naming rules, templates, configuration and the
generator that ties them together.
"""

from .model import EnumModel, TextSpan
from .parser import (
    FailureKind,
    ParseFailure,
    ParseResult,
    is_failure,
    parse,
    parse_all,
)
from .naming import capitalize_first, getter_name, extension_name
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine
from .generator import (
    EnumCodeGenerator,
    GeneratorError,
    GenerationResult,
    generate_fragment,
    when_method,
    maybe_when_method,
    when_or_null_method,
    map_method,
    maybe_map_method,
    map_with_values_method,
    getter_methods,
    extension_block,
)

__all__ = [
    # Model
    "EnumModel",
    "TextSpan",
    # Parser
    "FailureKind",
    "ParseFailure",
    "ParseResult",
    "is_failure",
    "parse",
    "parse_all",
    # Naming
    "capitalize_first",
    "getter_name",
    "extension_name",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Generator
    "EnumCodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_fragment",
    "when_method",
    "maybe_when_method",
    "when_or_null_method",
    "map_method",
    "maybe_map_method",
    "map_with_values_method",
    "getter_methods",
    "extension_block",
]
