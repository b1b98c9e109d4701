"""
CLI integration for code generation functionality.

Provides command-line interface for the codegen module.
"""

import argparse
import sys
from pathlib import Path
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box
from rich.markup import escape

from . import (
    list_supported_languages,
    get_generator,
    get_language_info,
    list_all_language_info,
    generate_code,
    GeneratorConfig,
    load_config,
    ConfigError,
    GeneratorError,
    ModelError,
    RegistryError,
)
from .core.document import convert_document
from .registry import get_registry, is_language_supported
from ..logging_config import get_logger
from ..utils import JSONLoaderError, load_json, load_json_from_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_codegen_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create a dedicated codegen subcommand parser.

    For use with: idl-codegen codegen [options]

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser for codegen command
    """
    parser = subparsers.add_parser(
        "codegen",
        help="Generate code from a model document",
        description="Generate interfaces and types from an interface-definition model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  idl-codegen codegen --language go --package-name greeting model.json
  idl-codegen codegen -l go --output greeting.go --stdin < model.json
  idl-codegen codegen --list-languages
  idl-codegen codegen --language-info go
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Model document (JSON)")
    input_group.add_argument("--url", help="URL to fetch the model document from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the model document from standard input"
    )

    # Core generation options
    parser.add_argument(
        "--language", "-l", default="go", help="Target language (default: go)"
    )

    parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    parser.add_argument("--config", help="Configuration file path (JSON)")

    # Common options
    parser.add_argument("--package-name", "--package", help="Package name")

    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    # Go-specific options
    go_group = parser.add_argument_group("Go-specific options")
    go_group.add_argument(
        "--no-json-tags", action="store_true", help="Don't generate JSON struct tags"
    )
    go_group.add_argument(
        "--no-omitempty", action="store_true", help="Don't add omitempty to JSON tags"
    )
    go_group.add_argument(
        "--json-tag-case",
        choices=["original", "snake", "camel", "pascal"],
        help="Case style for JSON tag names",
    )
    go_group.add_argument(
        "--args-types",
        action="store_true",
        help="Generate an arguments struct for each handler operation",
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

    parser.set_defaults(func=_handle_codegen_subcommand)
    return parser


def _handle_codegen_subcommand(args: argparse.Namespace) -> int:
    """Handle the codegen subcommand."""
    try:
        # Handle info commands
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        # Require input
        if not (args.file or args.url or args.stdin):
            console.print(
                "[red]✗[/red] Input source required (file, --url, or --stdin)"
            )
            return 1

        # Validate language
        if not _validate_language(args.language):
            return 1

        namespace = _get_subcommand_input(args)
        config = _build_subcommand_config(args)

        # Generate and output
        return _generate_and_output(namespace, args.language, config, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    # Create a rich table
    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"

        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()

    # Add usage hint
    console.print(
        Panel(
            "[bold]Usage:[/bold] idl-codegen codegen [dim]model.json[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] idl-codegen codegen --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not _validate_language(language, silent=True):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    try:
        info = get_language_info(language)
        generator = get_generator(language)
    except RegistryError as e:
        console.print(f"[red]✗ Error getting language info:[/red] {escape(str(e))}")
        return 1

    # Create main info panel
    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(
            info_text,
            title=f"🔧 {info['name'].title()} Generator",
            border_style="green",
        )
    )

    # Create configuration table
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config = generator.config
    config_table.add_row("Package Name", str(config.package_name))
    config_table.add_row("Add Comments", str(config.add_comments))
    config_table.add_row("Comment Wrap Length", str(config.comment_wrap_length))
    config_table.add_row("Generate JSON Tags", str(config.generate_json_tags))
    config_table.add_row("JSON Tag Omitempty", str(config.json_tag_omitempty))
    config_table.add_row("JSON Tag Case", str(config.json_tag_case))
    for key, value in sorted(config.custom.items()):
        config_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(config_table)

    # Add examples panel
    examples_text = f"""Generate interfaces:
[cyan]idl-codegen codegen --language {language} model.json[/cyan]

Generate to file:
[cyan]idl-codegen codegen -l {language} -o output{info['file_extension']} model.json[/cyan]

Custom package name:
[cyan]idl-codegen codegen -l {language} --package mypackage model.json[/cyan]"""

    console.print()
    console.print(Panel(examples_text, title="💡 Usage Examples", border_style="blue"))

    return 0


def _validate_language(language: str, silent: bool = False) -> bool:
    """Validate that a language is supported."""
    if not is_language_supported(language):
        if not silent:
            supported = list_supported_languages()
            console.print(f"[red]✗ Unsupported language '{language}'[/red]")
            console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
        return False
    return True


def _get_subcommand_input(args: argparse.Namespace):
    """Load the model document named by the arguments and convert it."""
    try:
        if args.file:
            source, document = load_json(file_path=args.file)
        elif args.url:
            source, document = load_json(url=args.url)
        elif args.stdin:
            source, document = load_json_from_stream(sys.stdin)
        else:
            raise CLIError("No input source specified")
    except FileNotFoundError as e:
        raise CLIError(str(e)) from e
    except JSONLoaderError as e:
        raise CLIError(f"Failed to load input: {e}") from e

    logger.info("Loaded model document from %s", source)
    try:
        return convert_document(document)
    except ModelError as e:
        raise CLIError(f"Invalid model document: {e}") from e


def _build_subcommand_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration for subcommand."""
    config_dict = {}

    # Override with CLI arguments
    if args.package_name:
        config_dict["package_name"] = args.package_name

    if args.no_comments:
        config_dict["add_comments"] = False

    if args.no_json_tags:
        config_dict["generate_json_tags"] = False

    if args.no_omitempty:
        config_dict["json_tag_omitempty"] = False

    if args.json_tag_case:
        config_dict["json_tag_case"] = args.json_tag_case

    if args.args_types:
        config_dict["operation_args_types"] = True

    try:
        return load_config(
            language=get_registry().resolve_language(args.language),
            custom_config=config_dict,
            config_file=args.config,
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(
    namespace, language: str, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate code and handle output with rich formatting."""
    try:
        generator = get_generator(language, config)
    except RegistryError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        return 1

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        gen_task = progress.add_task(
            f"[green]Generating {generator.language_name} code...", total=None
        )
        result = generate_code(generator, namespace)
        progress.remove_task(gen_task)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {escape(result.error_message)}")
        if isinstance(result.exception, GeneratorError):
            console.print(f"[dim]Details: {escape(str(result.exception))}[/dim]")
        return 1

    # Output code
    output_file = getattr(args, "output", None)
    if output_file:
        output_path = Path(output_file)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {escape(str(e))}")
            return 1
        console.print(
            f"[green]✓[/green] Generated {generator.language_name} code saved to [cyan]{output_path}[/cyan]"
        )
    else:
        top_border = "═" * 40
        console.print(
            f"[green]{top_border} 📄 Generated {generator.language_name.title()} Code {top_border}[/green]\n"
        )
        # Display code with syntax highlighting
        console.print(Syntax(result.code, generator.language_name, theme="monokai"))
        console.print(f"\n[green]{top_border}{top_border}{top_border}[/green]")

    # Show metadata if verbose
    if getattr(args, "verbose", False) and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )

        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    # Show warnings with rich formatting
    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {escape(warning)}")
        console.print()

    return 0
