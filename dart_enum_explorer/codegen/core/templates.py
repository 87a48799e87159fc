"""
Template engine wrapper for code generation.

Provides a Jinja2 environment preloaded with the Dart member templates and
filters used to render them. Templates live in memory so rendering never
depends on files shipped next to the package.
"""

from typing import Dict, Any, Optional

from jinja2 import (
    Environment,
    DictLoader,
    StrictUndefined,
    select_autoescape,
)

from .naming import getter_name


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


# Indentation of members inside an extension body. Continuation lines of the
# templates below are laid out relative to it.
MEMBER_INDENT = "  "

# Separator between members of an aggregate extension
MEMBER_SEPARATOR = "\n\n" + MEMBER_INDENT


WHEN_TEMPLATE = """\
T when<T extends Object>({
{% for value in values %}
    required T Function() {{ value }},
{% endfor %}
  }) =>
      switch (this) {
{% for value in values %}
        {{ enum_name }}.{{ value }} => {{ value }}(),
{% endfor %}
      };
"""

MAYBE_WHEN_TEMPLATE = """\
T maybeWhen<T extends Object>({
{% for value in values %}
    T Function()? {{ value }},
{% endfor %}
    required T Function() orElse,
  }) =>
      switch (this) {
{% for value in values %}
        {{ enum_name }}.{{ value }} => {{ value }}?.call() ?? orElse(),
{% endfor %}
      };
"""

WHEN_OR_NULL_TEMPLATE = """\
T? whenOrNull<T extends Object?>({
{% for value in values %}
    T? Function()? {{ value }},
{% endfor %}
  }) =>
      switch (this) {
{% for value in values %}
        {{ enum_name }}.{{ value }} => {{ value }}?.call(),
{% endfor %}
      };
"""

MAP_TEMPLATE = """\
void map({
{% for value in values %}
    required void Function() {{ value }},
{% endfor %}
  }) =>
      switch (this) {
{% for value in values %}
        {{ enum_name }}.{{ value }} => {{ value }}(),
{% endfor %}
      };
"""

MAYBE_MAP_TEMPLATE = """\
void maybeMap({
{% for value in values %}
    void Function()? {{ value }},
{% endfor %}
  }) =>
      switch (this) {
{% for value in values %}
        {{ enum_name }}.{{ value }} => {{ value }}?.call(),
{% endfor %}
      };
"""

MAP_WITH_VALUES_TEMPLATE = """\
static Map<String, T> toMapWithValues<T extends Object>({
{% for value in values %}
    required T {{ value }},
{% endfor %}
  }) =>
      {
{% for value in values %}
        {{ value | dart_string }}: {{ value }},
{% endfor %}
      };
"""

GETTERS_TEMPLATE = """\
{% for value in values %}
{{ member_indent if not loop.first else "" }}bool get {{ value | getter_name }} => this == {{ enum_name }}.{{ value }};
{% endfor %}
"""

EXTENSION_TEMPLATE = """\
extension {{ extension_name }} on {{ enum_name }} {
{{ member_indent }}{{ members | join(member_separator) }}
}
"""

BUILTIN_TEMPLATES = {
    "when.dart": WHEN_TEMPLATE,
    "maybe_when.dart": MAYBE_WHEN_TEMPLATE,
    "when_or_null.dart": WHEN_OR_NULL_TEMPLATE,
    "map.dart": MAP_TEMPLATE,
    "maybe_map.dart": MAYBE_MAP_TEMPLATE,
    "map_with_values.dart": MAP_WITH_VALUES_TEMPLATE,
    "getters.dart": GETTERS_TEMPLATE,
    "extension.dart": EXTENSION_TEMPLATE,
}


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize template engine.

        Args:
            templates: In-memory templates keyed by name
        """
        self._env = None
        self._setup_environment(dict(templates or {}))

    def _setup_environment(self, templates: Dict[str, str]):
        """Setup Jinja2 environment with code generation utilities."""
        self._env = Environment(
            loader=DictLoader(templates),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        # Add custom filters for code generation
        self._env.filters["getter_name"] = getter_name
        self._env.filters["dart_string"] = self._dart_string_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    # Template filters for code generation

    def _dart_string_filter(self, value: str) -> str:
        """Quote a value as a single-quoted Dart string literal."""
        escaped = str(value).replace("\\", "\\\\").replace("'", "\\'").replace("$", "\\$")
        return f"'{escaped}'"


def create_template_engine() -> TemplateEngine:
    """Create a template engine with the built-in Dart templates."""
    return TemplateEngine(BUILTIN_TEMPLATES)
