"""
Dart enum code generator.

Renders the companion members of an EnumModel (dispatch methods, predicate
getters, the aggregate extension) from the built-in templates. Every
operation is a pure function of the model and the configuration.
"""

from typing import Dict, List, Any, Optional, Union

from ...logging_config import get_logger
from ..registry import OperationKind, OperationRegistry, get_registry
from .config import GeneratorConfig, load_config
from .model import EnumModel
from .naming import check_model_names, extension_name
from .templates import (
    MEMBER_INDENT,
    MEMBER_SEPARATOR,
    create_template_engine,
)

logger = get_logger(__name__)

# Members bundled by the aggregate extension, in output order
EXTENSION_MEMBERS = [
    OperationKind.GETTERS,
    OperationKind.WHEN,
    OperationKind.MAYBE_WHEN,
    OperationKind.WHEN_OR_NULL,
]


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class EnumCodeGenerator:
    """Generates Dart members for enum models."""

    def __init__(
        self,
        config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
        registry: Optional[OperationRegistry] = None,
    ):
        """
        Initialize generator.

        Args:
            config: GeneratorConfig or a dict of overrides
            registry: Operation registry (global registry by default)
        """
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(custom_config=config)
        self.registry = registry or get_registry()
        self._template_engine = create_template_engine()

    def _render(self, kind: OperationKind, model: EnumModel) -> str:
        """Render the per-value template of an operation."""
        spec = self.registry.get_spec(kind)
        context = {
            "enum_name": model.name,
            "values": list(model.values),
            "member_indent": MEMBER_INDENT,
        }
        return self._template_engine.render_template(spec.template_name, context).rstrip("\n")

    def _render_extension(self, name: str, model: EnumModel, members: List[str]) -> str:
        """Render an extension block holding ``members``."""
        spec = self.registry.get_spec(OperationKind.EXTENSION)
        context = {
            "extension_name": name,
            "enum_name": model.name,
            "members": members,
            "member_indent": MEMBER_INDENT,
            "member_separator": MEMBER_SEPARATOR,
        }
        return self._template_engine.render_template(spec.template_name, context).rstrip("\n")

    # Operations

    def when_method(self, model: EnumModel) -> str:
        """Exhaustive ``when`` with one required callback per value."""
        return self._render(OperationKind.WHEN, model)

    def maybe_when_method(self, model: EnumModel) -> str:
        """Partial ``maybeWhen``; missing callbacks fall back to ``orElse``."""
        return self._render(OperationKind.MAYBE_WHEN, model)

    def when_or_null_method(self, model: EnumModel) -> str:
        """Partial ``whenOrNull``; missing callbacks yield null."""
        return self._render(OperationKind.WHEN_OR_NULL, model)

    def map_method(self, model: EnumModel) -> str:
        return self._render(OperationKind.MAP, model)

    def maybe_map_method(self, model: EnumModel) -> str:
        return self._render(OperationKind.MAYBE_MAP, model)

    def map_with_values_method(self, model: EnumModel) -> str:
        """Static ``toMapWithValues`` building ``{'value': value, ...}``."""
        return self._render(OperationKind.MAP_WITH_VALUES, model)

    def getter_methods(self, model: EnumModel) -> str:
        """One ``bool get isValue`` predicate per value."""
        return self._render(OperationKind.GETTERS, model)

    def extension_block(self, model: EnumModel) -> str:
        """Getters, when, maybeWhen and whenOrNull bundled in one extension."""
        members = [self.generate(model, kind) for kind in EXTENSION_MEMBERS]
        name = self.container_name(model, OperationKind.EXTENSION)
        return self._render_extension(name, model, members)

    # Dispatch and containers

    def generate(self, model: EnumModel, kind: Union[OperationKind, str]) -> str:
        """
        Generate the fragment for one operation.

        Args:
            model: Parsed enum
            kind: Operation kind or a registered operation name

        Returns:
            Member body, or the whole block for the extension operation

        Raises:
            GeneratorError: If the operation has no generator method
        """
        spec = self.registry.get_spec(kind)
        method = getattr(self, spec.method_name, None)
        if method is None:
            raise GeneratorError(
                f"Operation {spec.kind.value} has no generator method '{spec.method_name}'"
            )

        logger.debug("Generating %s for enum %s", spec.kind.value, model.name)
        return method(model)

    def suffix_for(self, kind: Union[OperationKind, str]) -> str:
        """Container suffix of an operation, honoring configuration overrides."""
        spec = self.registry.get_spec(kind)
        override = self.config.operation_suffixes.get(spec.kind.value)
        if override:
            return override
        if spec.kind == OperationKind.EXTENSION:
            return self.config.extension_suffix
        return spec.suffix

    def container_name(self, model: EnumModel, kind: Union[OperationKind, str]) -> str:
        """Name of the extension that holds the generated member(s)."""
        return extension_name(model.name, self.suffix_for(kind))

    def wrap_in_extension(
        self, model: EnumModel, body: str, kind: Union[OperationKind, str]
    ) -> str:
        """Place a member body in ``extension <Name><Suffix> on <Name> { ... }``."""
        return self._render_extension(self.container_name(model, kind), model, [body])

    def generate_block(self, model: EnumModel, kind: Union[OperationKind, str]) -> str:
        """Generate an operation as a ready-to-insert extension block."""
        spec = self.registry.get_spec(kind)
        code = self.generate(model, spec.kind)
        if spec.kind == OperationKind.EXTENSION:
            return code
        return self.wrap_in_extension(model, code, spec.kind)

    def validate_model(self, model: EnumModel) -> List[str]:
        """Warnings about values that would produce invalid Dart."""
        return check_model_names(model)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_fragment(
    generator: EnumCodeGenerator,
    model: EnumModel,
    kind: Union[OperationKind, str],
    wrap: bool = False,
) -> GenerationResult:
    """
    Generate one operation with error handling.

    Args:
        generator: Code generator instance
        model: Parsed enum
        kind: Operation kind or name
        wrap: Return the fragment wrapped in its extension container

    Returns:
        GenerationResult with code, warnings, and metadata; never raises
    """
    try:
        spec = generator.registry.get_spec(kind)
        warnings = generator.validate_model(model)

        if wrap:
            code = generator.generate_block(model, spec.kind)
        else:
            code = generator.generate(model, spec.kind)

        metadata = {
            "enum": model.name,
            "operation": spec.kind.value,
            "container": generator.container_name(model, spec.kind),
            "value_count": len(model.values),
            "has_duplicates": model.has_duplicates,
        }

        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.warning("Generation of %s for %s failed: %s", kind, model.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)


# Default generator instance
_default_generator = None


def get_default_generator() -> EnumCodeGenerator:
    """Get a generator with the default configuration."""
    global _default_generator
    if _default_generator is None:
        _default_generator = EnumCodeGenerator()
    return _default_generator


def when_method(model: EnumModel) -> str:
    return get_default_generator().when_method(model)


def maybe_when_method(model: EnumModel) -> str:
    return get_default_generator().maybe_when_method(model)


def when_or_null_method(model: EnumModel) -> str:
    return get_default_generator().when_or_null_method(model)


def map_method(model: EnumModel) -> str:
    return get_default_generator().map_method(model)


def maybe_map_method(model: EnumModel) -> str:
    return get_default_generator().maybe_map_method(model)


def map_with_values_method(model: EnumModel) -> str:
    return get_default_generator().map_with_values_method(model)


def getter_methods(model: EnumModel) -> str:
    return get_default_generator().getter_methods(model)


def extension_block(model: EnumModel) -> str:
    return get_default_generator().extension_block(model)
