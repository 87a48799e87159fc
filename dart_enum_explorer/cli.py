from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from .codegen.cli_integration import (
    CLIError,
    add_codegen_args,
    build_config,
    generate_and_output,
    list_operations,
    print_config_warnings,
    resolve_operations,
)
from .codegen.core.generator import EnumCodeGenerator
from .codegen.core.model import EnumModel
from .codegen.core.parser import is_failure, parse_all
from .document import apply_operations, find_enum_at_line
from .logging_config import get_logger, setup_logging
from .utils import SourceLoaderError, load_source

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_ENUM = 2


class CLIHandler:
    """Handle command-line interface (CLI) operations for Dart sources."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler with default components."""
        self.data: str | None = None
        self.source: str | None = None
        self.path: Path | None = None
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def set_data(self, data: str, source: str, path: Path | None = None) -> None:
        """Set the source text to process.

        Args:
            data: The Dart source text.
            source: The source name or identifier.
            path: Local file the text came from, if any.
        """
        self.data = data
        self.source = source
        self.path = path
        logger.info("Data set for source: %s", source)

    def run(self, args: Any) -> int:
        """Run CLI mode operations based on parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 success, 1 failure, 2 no enum found).
        """
        if self.data is None:
            self.console.print("❌ [red]No data loaded[/red]")
            logger.warning("No data loaded; aborting CLI run")
            return EXIT_ERROR

        try:
            config = build_config(args)
            operations = resolve_operations(args)
        except CLIError as e:
            self.console.print(f"[red]✗ Error:[/red] {e}")
            return EXIT_ERROR

        print_config_warnings(config, self.console)
        generator = EnumCodeGenerator(config)

        models = self._select_models(args, config.allow_duplicate_values)
        if not models:
            self.console.print(f"[yellow]⚠️  No enum declarations found in {self.source}[/yellow]")
            return EXIT_NO_ENUM

        logger.info("Found %d enum(s) in %s", len(models), self.source)

        if getattr(args, "list_enums", False):
            self._print_enums(models)
            return EXIT_OK

        if getattr(args, "write", False):
            return self._handle_write(models, operations, generator, args)

        return generate_and_output(models, operations, generator, args, self.console)

    def _select_models(self, args: Any, allow_duplicates: bool) -> list[EnumModel]:
        """Enums selected by --line / --enum, or every enum in the document."""
        line = getattr(args, "line", None)
        if line is not None:
            result = find_enum_at_line(self.data, line - 1, allow_duplicates)
            if is_failure(result):
                logger.info("No enum at line %d: %s", line, result)
                return []
            models = [result]
        else:
            models = parse_all(self.data, allow_duplicates)

        names = getattr(args, "enum", None)
        if names:
            models = [model for model in models if model.name in names]
        return models

    def _print_enums(self, models: list[EnumModel]) -> None:
        """Display a table of the enums found."""
        table = Table(title=f"🔎 Enums in {self.source}", box=box.ROUNDED)
        table.add_column("Enum", style="bold green", no_wrap=True)
        table.add_column("Line", style="cyan", justify="right")
        table.add_column("Values", style="white")

        for model in models:
            line = model.source_range.start_line + 1 if model.source_range else "?"
            table.add_row(model.name, str(line), ", ".join(model.values))

        self.console.print(table)

    def _handle_write(self, models, operations, generator, args) -> int:
        """Insert generated blocks into the document and save it."""
        new_text = apply_operations(
            self.data,
            operations,
            generator,
            enum_names=[model.name for model in models],
        )

        target = getattr(args, "output", None) or self.path
        if target is None:
            self.console.print(
                new_text, markup=False, highlight=False, soft_wrap=True, end=""
            )
            return EXIT_OK

        target = Path(target)
        if target == self.path and new_text == self.data:
            self.console.print(f"[green]✓[/green] {target} is already up to date")
            return EXIT_OK

        try:
            target.write_text(new_text, encoding="utf-8")
        except OSError as e:
            self.console.print(f"[red]✗ Failed to write to {target}:[/red] {e}")
            logger.error("Write failed for %s: %s", target, e)
            return EXIT_ERROR

        self.console.print(f"[green]✓[/green] Updated [cyan]{target}[/cyan]")
        return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the dart-enum-explorer command."""
    parser = argparse.ArgumentParser(
        prog="dart-enum-explorer",
        description="Generate when/map/is-getter extensions for Dart enums",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dart-enum-explorer status.dart
  dart-enum-explorer status.dart -g when -g getters
  dart-enum-explorer status.dart --line 3 --all --write
  dart-enum-explorer --stdin -g maybe-when < status.dart
  dart-enum-explorer --list-operations
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Dart file to process")
    input_group.add_argument("--url", help="URL to fetch Dart source from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read Dart source from standard input"
    )

    selection = parser.add_argument_group("enum selection")
    selection.add_argument(
        "--enum",
        metavar="NAME",
        action="append",
        help="Only process the named enum; repeatable",
    )
    selection.add_argument(
        "--line",
        type=int,
        metavar="N",
        help="Process the enum declared on line N (1-based)",
    )
    selection.add_argument(
        "--list-enums", action="store_true", help="List enums found and exit"
    )

    add_codegen_args(parser)

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", metavar="FILE", help="Also log to FILE")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point of the dart-enum-explorer command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    console = Console()

    if args.list_operations:
        return list_operations(console)

    if not (args.file or args.url or args.stdin):
        parser.print_usage()
        console.print("[red]✗[/red] Input source required (file, --url, or --stdin)")
        return EXIT_ERROR

    try:
        source, text = load_source(file_path=args.file, url=args.url, stdin=args.stdin)
    except (FileNotFoundError, SourceLoaderError) as e:
        console.print(f"[red]✗ Failed to load input:[/red] {e}")
        return EXIT_ERROR

    handler = CLIHandler(console)
    handler.set_data(text, source, Path(args.file) if args.file else None)
    return handler.run(args)
