"""
Command-line interface for code generation.

Loads a schema document, generates the target-language tree and writes it
to an output directory (or prints it).
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import GenerationResult, generate_code
from .logging_config import configure_logging, get_logger
from .registry import (
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``vocab-codegen`` command."""
    parser = argparse.ArgumentParser(
        prog="vocab-codegen",
        description="Generate typed classes from a data model vocabulary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vocab-codegen models.json --output-dir ./OpenActive.NET
  vocab-codegen --url https://example.org/models.json -o ./out --allow-partial
  vocab-codegen --list-languages
  vocab-codegen --language-info dotnet
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Schema document (JSON)")
    input_group.add_argument("--url", help="URL to fetch the schema document from")

    parser.add_argument(
        "--language",
        "-l",
        default="dotnet",
        help="Target language for code generation (default: dotnet)",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        metavar="DIR",
        help="Directory to write generated files to (default: print them)",
    )
    parser.add_argument("--config", metavar="FILE", help="Configuration file (JSON)")
    parser.add_argument(
        "--namespace", metavar="NAME", help="Namespace of the generated code"
    )
    parser.add_argument(
        "--allow-partial",
        action="store_true",
        help="Skip models that fail to compile instead of failing the run",
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add documentation comments to generated code",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Request timeout in seconds for --url (default: 30)",
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    # Diagnostics
    diag_group = parser.add_argument_group("diagnostics")
    diag_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show generation result metadata",
    )
    diag_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def _list_languages() -> int:
    """Print every registered generator and the names it answers to."""
    table = Table(box=box.ROUNDED, title="Target Languages", title_style="bold cyan")
    table.add_column("Name", style="bold green")
    table.add_column("Also accepted as", style="blue")
    table.add_column("Writes", style="cyan")
    table.add_column("Output folders", style="dim")

    for name, info in list_all_language_info().items():
        table.add_row(
            name,
            ", ".join(info["aliases"]) or "-",
            f"*{info['file_extension']}",
            " ".join(info["dirs"]),
        )

    console.print(table)
    console.print(
        "[dim]Try:[/dim] vocab-codegen models.json -l dotnet -o ./out",
        highlight=False,
    )
    return 0


def _config_rows(config: GeneratorConfig) -> List[tuple]:
    rows = [
        ("namespace", config.namespace),
        ("foundation_namespace", config.foundation_namespace),
        ("foundation_root", config.foundation_root),
        ("union_type", config.union_type),
        ("list_type", config.list_type),
        ("add_comments", config.add_comments),
        ("allow_partial", config.allow_partial),
    ]
    rows.extend(sorted(config.custom.items()))
    return [(key, str(value)) for key, value in rows]


def _show_language_info(language: str) -> int:
    """Print the generator behind a language name and its default settings."""
    if not _validate_language(language):
        return 1

    info = get_language_info(language)
    details = Table.grid(padding=(0, 2))
    details.add_column(style="bold")
    details.add_column()
    details.add_row("Generator", info["class"])
    details.add_row("Module", info["module"])
    details.add_row("Aliases", ", ".join(info["aliases"]) or "-")
    details.add_row("Extension", info["file_extension"])
    details.add_row("Folders", ", ".join(info["dirs"]))
    console.print(Panel(details, title=info["name"], border_style="green"))

    defaults = Table(title="Defaults", box=box.MINIMAL, header_style="bold cyan")
    defaults.add_column("Key")
    defaults.add_column("Value", style="green")
    for key, value in _config_rows(info["config"]):
        defaults.add_row(key, value)
    console.print(defaults)
    return 0


def _validate_language(language: str) -> bool:
    if is_language_supported(language):
        return True
    console.print(
        f"[red]✗ No generator for '{language}'.[/red] "
        f"Known: {', '.join(list_supported_languages())} (see --list-languages)"
    )
    return False


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    overrides = {}

    if args.namespace:
        overrides["namespace"] = args.namespace

    if args.allow_partial:
        overrides["allow_partial"] = True

    if args.no_comments:
        overrides["add_comments"] = False

    if args.output_dir:
        overrides["output_dir"] = args.output_dir

    language = get_registry().resolve_language(args.language)
    try:
        return load_config(language, custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def write_files(result: GenerationResult, output_dir: Path, dirs: List[str]) -> List[Path]:
    """
    Write generated files below ``output_dir``.

    Args:
        result: Successful generation result
        output_dir: Root of the generated tree
        dirs: Sub-directories to create even when they stay empty

    Returns:
        Paths of the written files
    """
    for directory in dirs:
        (output_dir / directory.strip("/")).mkdir(parents=True, exist_ok=True)

    written = []
    for relative_path, code in sorted(result.files.items()):
        path = output_dir / relative_path.lstrip("/")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code, encoding="utf-8")
        written.append(path)

    logger.info("Wrote %d file(s) to %s", len(written), output_dir)
    return written


def _print_files(result: GenerationResult):
    """Print generated files with syntax highlighting."""
    for relative_path, code in sorted(result.files.items()):
        console.print(f"\n[green]── {relative_path} ──[/green]")
        console.print(Syntax(code, "csharp", theme="monokai"))


def _print_summary(result: GenerationResult, verbose: bool):
    """Print generation metadata (when verbose) and warnings."""
    if verbose and result.metadata:
        metadata_table = Table(
            title="Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            if isinstance(value, list):
                value = ", ".join(value) if value else "none"
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    if result.warnings:
        console.print("\n[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()


def _generate_and_output(args: argparse.Namespace) -> int:
    """Load the schema, generate code and write or print the result."""
    source, schema_set = load_schema(
        file_path=args.file, url=args.url, timeout=args.timeout
    )
    console.print(f"[dim]Loaded {source}[/dim]")

    config = _build_config(args)
    generator = get_generator(args.language, config)
    result = generate_code(generator, schema_set)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        for error in result.errors:
            console.print(f"  [red]•[/red] {error}")
        _print_summary(result, args.verbose)
        return 1

    if args.output_dir:
        written = write_files(result, Path(args.output_dir), generator.get_dirs())
        console.print(
            f"[green]✓[/green] Generated {len(written)} {generator.language_name} "
            f"file(s) in [cyan]{args.output_dir}[/cyan]"
        )
    else:
        _print_files(result)

    _print_summary(result, args.verbose)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the ``vocab-codegen`` command.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    level = "INFO" if args.verbose and args.log_level == "WARNING" else args.log_level
    configure_logging(level)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.file or args.url):
            console.print("[red]✗[/red] Input source required (file or --url)")
            return 1

        if not _validate_language(args.language):
            return 1

        return _generate_and_output(args)

    except (CLIError, RegistryError, SchemaLoaderError, FileNotFoundError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except OSError as e:
        console.print(f"[red]✗ Failed to write output:[/red] {e}")
        return 1
