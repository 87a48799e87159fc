"""
Dart Enum Explorer

Parses Dart enum declarations and generates when/map dispatch methods,
`is` getters and extension blocks for them.
"""

from .codegen import (
    EnumCodeGenerator,
    EnumModel,
    FailureKind,
    GenerationResult,
    GeneratorConfig,
    OperationKind,
    ParseFailure,
    TextSpan,
    generate_from_source,
    is_failure,
    parse,
    parse_all,
)
from .document import (
    CodeAction,
    TextEdit,
    apply_edits,
    apply_operations,
    build_code_action,
    find_block,
    find_enum_at_line,
    provide_code_actions,
)

__version__ = "0.1.0"

__all__ = [
    "EnumCodeGenerator",
    "EnumModel",
    "FailureKind",
    "GenerationResult",
    "GeneratorConfig",
    "OperationKind",
    "ParseFailure",
    "TextSpan",
    "generate_from_source",
    "is_failure",
    "parse",
    "parse_all",
    "CodeAction",
    "TextEdit",
    "apply_edits",
    "apply_operations",
    "build_code_action",
    "find_block",
    "find_enum_at_line",
    "provide_code_actions",
]
