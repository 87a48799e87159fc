"""Tests for the enum code generator."""

import re

import pytest

from dart_enum_explorer.codegen import generate_from_source
from dart_enum_explorer.codegen.core import generator as generator_module
from dart_enum_explorer.codegen.core.config import GeneratorConfig
from dart_enum_explorer.codegen.core.generator import (
    EnumCodeGenerator,
    GeneratorError,
    generate_fragment,
)
from dart_enum_explorer.codegen.core.model import EnumModel
from dart_enum_explorer.codegen.core.parser import parse
from dart_enum_explorer.codegen.core.templates import TemplateError
from dart_enum_explorer.codegen.registry import (
    OperationKind,
    OperationSpec,
    create_default_registry,
)


def lines(*parts: str) -> str:
    return "\n".join(parts)


WHEN_STATUS = lines(
    "T when<T extends Object>({",
    "    required T Function() active,",
    "    required T Function() inactive,",
    "  }) =>",
    "      switch (this) {",
    "        Status.active => active(),",
    "        Status.inactive => inactive(),",
    "      };",
)

MAYBE_WHEN_STATUS = lines(
    "T maybeWhen<T extends Object>({",
    "    T Function()? active,",
    "    T Function()? inactive,",
    "    required T Function() orElse,",
    "  }) =>",
    "      switch (this) {",
    "        Status.active => active?.call() ?? orElse(),",
    "        Status.inactive => inactive?.call() ?? orElse(),",
    "      };",
)

WHEN_OR_NULL_STATUS = lines(
    "T? whenOrNull<T extends Object?>({",
    "    T? Function()? active,",
    "    T? Function()? inactive,",
    "  }) =>",
    "      switch (this) {",
    "        Status.active => active?.call(),",
    "        Status.inactive => inactive?.call(),",
    "      };",
)

GETTERS_STATUS = lines(
    "bool get isActive => this == Status.active;",
    "  bool get isInactive => this == Status.inactive;",
)


def test_when_method(generator, status_model):
    assert generator.when_method(status_model) == WHEN_STATUS


def test_maybe_when_method(generator, status_model):
    assert generator.maybe_when_method(status_model) == MAYBE_WHEN_STATUS


def test_when_or_null_method(generator, status_model):
    assert generator.when_or_null_method(status_model) == WHEN_OR_NULL_STATUS


def test_map_method(generator, status_model):
    assert generator.map_method(status_model) == lines(
        "void map({",
        "    required void Function() active,",
        "    required void Function() inactive,",
        "  }) =>",
        "      switch (this) {",
        "        Status.active => active(),",
        "        Status.inactive => inactive(),",
        "      };",
    )


def test_maybe_map_method(generator, status_model):
    assert generator.maybe_map_method(status_model) == lines(
        "void maybeMap({",
        "    void Function()? active,",
        "    void Function()? inactive,",
        "  }) =>",
        "      switch (this) {",
        "        Status.active => active?.call(),",
        "        Status.inactive => inactive?.call(),",
        "      };",
    )


def test_map_with_values_method(generator, status_model):
    assert generator.map_with_values_method(status_model) == lines(
        "static Map<String, T> toMapWithValues<T extends Object>({",
        "    required T active,",
        "    required T inactive,",
        "  }) =>",
        "      {",
        "        'active': active,",
        "        'inactive': inactive,",
        "      };",
    )


def test_getter_methods(generator, status_model):
    assert generator.getter_methods(status_model) == GETTERS_STATUS


def test_getter_methods_single_value(generator):
    model = EnumModel("Only", ("one",))
    assert generator.getter_methods(model) == "bool get isOne => this == Only.one;"


def test_getter_names_only_touch_first_character(generator):
    model = EnumModel("Review", ("pending_review", "_hidden", "HTTP", "x2"))
    code = generator.getter_methods(model)
    names = re.findall(r"bool get (\w+)", code)
    assert names == ["isPending_review", "is_hidden", "isHTTP", "isX2"]


def test_extension_block(generator, status_model):
    expected = lines(
        "extension StatusX on Status {",
        "  " + GETTERS_STATUS,
        "",
        "  " + WHEN_STATUS,
        "",
        "  " + MAYBE_WHEN_STATUS,
        "",
        "  " + WHEN_OR_NULL_STATUS,
        "}",
    )
    assert generator.extension_block(status_model) == expected


def test_extension_block_uses_configured_suffix(status_model):
    custom = EnumCodeGenerator(GeneratorConfig(extension_suffix="Ext"))
    assert custom.extension_block(status_model).startswith("extension StatusExt on Status {")


def test_wrap_in_extension(generator, status_model):
    block = generator.generate_block(status_model, OperationKind.GETTERS)
    assert block == lines(
        "extension StatusGetters on Status {",
        "  " + GETTERS_STATUS,
        "}",
    )


def test_generate_block_for_extension_is_not_wrapped_twice(generator, status_model):
    block = generator.generate_block(status_model, OperationKind.EXTENSION)
    assert block == generator.extension_block(status_model)
    assert block.count("extension ") == 1


def test_container_names(generator, status_model):
    assert generator.container_name(status_model, OperationKind.WHEN) == "StatusWhenMethod"
    assert generator.container_name(status_model, "maybe-map") == "StatusMaybeMapMethod"
    assert generator.container_name(status_model, OperationKind.EXTENSION) == "StatusX"


def test_operation_suffix_override(status_model):
    custom = EnumCodeGenerator({"operation_suffixes": {"when": "When"}})
    assert custom.container_name(status_model, OperationKind.WHEN) == "StatusWhen"
    assert custom.container_name(status_model, OperationKind.MAP) == "StatusMapMethod"


def test_generate_dispatches_by_name(generator, status_model):
    assert generator.generate(status_model, "when") == WHEN_STATUS
    assert generator.generate(status_model, "maybeWhen") == MAYBE_WHEN_STATUS
    assert generator.generate(status_model, OperationKind.GETTERS) == GETTERS_STATUS


@pytest.mark.parametrize("kind", list(OperationKind))
def test_generation_is_deterministic(kind, status_model):
    """Two generators, two calls each: byte-identical output."""
    first = EnumCodeGenerator()
    second = EnumCodeGenerator()
    outputs = {
        first.generate(status_model, kind),
        first.generate(status_model, kind),
        second.generate(status_model, kind),
    }
    assert len(outputs) == 1


def test_when_is_exhaustive(generator):
    """One arm per value, each value referenced once as a case."""
    model = EnumModel("Planet", ("mercury", "venus", "earth", "mars", "jupiter"))
    code = generator.when_method(model)
    arms = re.findall(r"Planet\.(\w+) => (\w+)\(\),", code)
    assert [case for case, _ in arms] == list(model.values)
    assert all(case == callback for case, callback in arms)
    assert "default" not in code


def test_when_parameters_follow_declaration_order(generator):
    model = EnumModel("Order", ("zeta", "alpha", "mid"))
    params = re.findall(r"required T Function\(\) (\w+),", generator.when_method(model))
    assert params == ["zeta", "alpha", "mid"]


def test_maybe_when_falls_back_to_or_else(generator):
    """A value whose callback may be absent dispatches to orElse."""
    model = EnumModel("Pair", ("a", "b"))
    code = generator.maybe_when_method(model)
    assert "Pair.b => b?.call() ?? orElse()," in code
    params = re.findall(r"(?:required )?T Function\(\)\?? (\w+),", code)
    assert params == ["a", "b", "orElse"]


def test_constructor_values_generate_like_simple_values(generator):
    simple = parse("enum Status { active, inactive }")
    with_args = parse("enum Status { active(1), inactive(2); final int code; }")
    for kind in OperationKind:
        assert generator.generate(simple, kind) == generator.generate(with_args, kind)


def test_validate_model_reports_problems(generator):
    model = EnumModel("Mixed", ("active", "Active", "orElse", "a", "a"))
    warnings = generator.validate_model(model)
    assert any("declared more than once" in w for w in warnings)
    assert any("isActive" in w for w in warnings)
    assert any("orElse" in w for w in warnings)


def test_validate_model_clean(generator, status_model):
    assert generator.validate_model(status_model) == []


def test_generate_fragment_success(generator, status_model):
    result = generate_fragment(generator, status_model, "getters", wrap=True)
    assert result.success
    assert result.code.startswith("extension StatusGetters on Status {")
    assert result.metadata["operation"] == "getters"
    assert result.metadata["container"] == "StatusGetters"
    assert result.metadata["value_count"] == 2
    assert result.warnings == []


def test_generate_fragment_keeps_duplicates(generator):
    """Duplicates are generated as given and flagged, never collapsed."""
    model = EnumModel("Dup", ("a", "a"))
    result = generate_fragment(generator, model, OperationKind.WHEN)
    assert result.success
    assert result.code.count("Dup.a => a(),") == 2
    assert result.metadata["has_duplicates"] is True
    assert result.warnings


def test_generate_fragment_reports_errors(generator, status_model):
    result = generate_fragment(generator, status_model, "no-such-operation")
    assert not result.success
    assert "Unknown operation" in result.error_message
    assert result.exception is not None


def test_generate_raises_for_missing_method(status_model):
    class Incomplete(EnumCodeGenerator):
        when_method = None

    with pytest.raises(GeneratorError):
        Incomplete().generate(status_model, OperationKind.WHEN)


def test_module_level_functions_match_generator(generator, status_model):
    assert generator_module.when_method(status_model) == generator.when_method(status_model)
    assert generator_module.getter_methods(status_model) == GETTERS_STATUS
    assert generator_module.extension_block(status_model) == generator.extension_block(
        status_model
    )


def test_enum_model_rejects_empty_values():
    with pytest.raises(ValueError):
        EnumModel("Status", ())


def test_enum_model_rejects_invalid_names():
    with pytest.raises(ValueError):
        EnumModel("status", ("a",))
    with pytest.raises(ValueError):
        EnumModel("Status", ("1a",))


def test_generate_from_source():
    result = generate_from_source("enum Mode { on, off }", "getters")
    assert result.success
    assert result.code == lines(
        "extension ModeGetters on Mode {",
        "  bool get isOn => this == Mode.on;",
        "  bool get isOff => this == Mode.off;",
        "}",
    )


def test_generate_from_source_reports_parse_failure():
    result = generate_from_source("class Mode {}")
    assert not result.success
    assert "NoEnumKeyword" in result.error_message


def test_missing_template_is_reported(status_model):
    """A registry entry naming an unknown template fails with TemplateError."""
    registry = create_default_registry()
    registry.register(
        OperationSpec(
            OperationKind.MAP, "map()", "MapMethod", "refactor.x", "map_method", "gone.dart"
        ),
        replace=True,
    )
    custom = EnumCodeGenerator(registry=registry)

    with pytest.raises(TemplateError, match="gone.dart"):
        custom.map_method(status_model)

    result = generate_fragment(custom, status_model, OperationKind.MAP)
    assert not result.success
    assert isinstance(result.exception, TemplateError)
