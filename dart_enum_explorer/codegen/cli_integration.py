"""
CLI integration for code generation functionality.

Provides the command-line options and rich output for the codegen module.
"""

import argparse
from pathlib import Path
from typing import List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich import box

from ..logging_config import get_logger
from .core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .core.generator import EnumCodeGenerator, generate_fragment
from .core.model import EnumModel
from .registry import OperationKind, RegistryError, get_registry

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def add_codegen_args(parser: argparse.ArgumentParser):
    """Add code generation arguments to an existing CLI parser."""

    codegen_group = parser.add_argument_group("code generation")

    codegen_group.add_argument(
        "--generate",
        "-g",
        metavar="OPERATION",
        action="append",
        help="Operation to generate; repeatable (default: extension, "
        "use --list-operations to see options)",
    )

    codegen_group.add_argument(
        "--all",
        action="store_true",
        help="Generate every operation",
    )

    codegen_group.add_argument(
        "--write",
        action="store_true",
        help="Insert the generated blocks into the document instead of printing them",
    )

    codegen_group.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Output file (default: stdout, or the input file with --write)",
    )

    codegen_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )

    codegen_group.add_argument(
        "--extension-suffix",
        metavar="SUFFIX",
        help="Suffix of the aggregate extension name (default: X)",
    )

    codegen_group.add_argument(
        "--allow-duplicates",
        action="store_true",
        help="Accept enums that repeat a value instead of skipping them",
    )

    codegen_group.add_argument(
        "--list-operations",
        action="store_true",
        help="List supported operations and exit",
    )

    codegen_group.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {}

    if getattr(args, "extension_suffix", None):
        overrides["extension_suffix"] = args.extension_suffix

    if getattr(args, "allow_duplicates", False):
        overrides["allow_duplicate_values"] = True

    try:
        return load_config(
            custom_config=overrides, config_file=getattr(args, "config", None)
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}")


def resolve_operations(args: argparse.Namespace) -> List[OperationKind]:
    """Operations requested on the command line, in request order."""
    registry = get_registry()

    if getattr(args, "all", False):
        return registry.list_operations()

    requested = getattr(args, "generate", None) or ["extension"]
    operations = []
    try:
        for name in requested:
            kind = registry.resolve(name)
            if kind not in operations:
                operations.append(kind)
    except RegistryError as e:
        raise CLIError(str(e))
    return operations


def list_operations(console: Console) -> int:
    """List supported operations with details."""
    registry = get_registry()

    table = Table(
        title="📋 Supported Operations", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Operation", style="bold green", no_wrap=True)
    table.add_column("Container Suffix", style="cyan")
    table.add_column("Description", style="dim")
    table.add_column("Aliases", style="blue")

    for kind in registry.list_operations():
        spec = registry.get_spec(kind)
        aliases = ", ".join(registry.get_aliases(kind)) or "[dim]none[/dim]"
        table.add_row(f"🔧 {kind.value}", spec.suffix, spec.description, aliases)

    console.print()
    console.print(table)
    console.print()

    console.print(
        Panel(
            "[bold]Usage:[/bold] dart-enum-explorer [dim]file.dart[/dim] -g [cyan]OPERATION[/cyan]\n"
            "[bold]Write:[/bold] dart-enum-explorer [dim]file.dart[/dim] --all --write",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def print_config_warnings(config: GeneratorConfig, console: Console):
    """Show configuration warnings, if any."""
    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")


def generate_and_output(
    models: List[EnumModel],
    operations: List[OperationKind],
    generator: EnumCodeGenerator,
    args: argparse.Namespace,
    console: Console,
) -> int:
    """Generate code blocks and print them or save them to a file."""
    blocks = []
    warnings = []
    metadata_rows = []

    for model in models:
        for kind in operations:
            result = generate_fragment(generator, model, kind, wrap=True)
            if not result.success:
                console.print(
                    f"[red]✗ Code generation failed:[/red] {result.error_message}"
                )
                return 1
            blocks.append(result.code)
            metadata_rows.append(result.metadata)
            for warning in result.warnings:
                if warning not in warnings:
                    warnings.append(warning)

    code = "\n\n".join(blocks) + "\n"

    output_file = getattr(args, "output", None)
    if output_file:
        output_path = Path(output_file)
        try:
            output_path.write_text(code, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(
            f"[green]✓[/green] Generated code saved to [cyan]{output_path}[/cyan]"
        )
    else:
        console.print(Syntax(code, "dart", theme="monokai"))

    if getattr(args, "verbose", False) and metadata_rows:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        for column in metadata_rows[0]:
            metadata_table.add_column(column.replace("_", " ").title())
        for row in metadata_rows:
            metadata_table.add_row(*(str(value) for value in row.values()))

        console.print()
        console.print(metadata_table)

    if warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return 0
