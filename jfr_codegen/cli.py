"""
Command-line interface for the events generator.

    jfr-codegen [LOCATOR] --output src/main/java
    jfr-codegen https://example.org/jdk21-events.json --plan
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from .codegen.core import (
    ArtifactPlanner,
    ConfigError,
    ConfigManager,
    DirectoryFiler,
    GenerationDriver,
    GenerationError,
    GeneratorConfig,
    load_config,
    resolve_locator,
)
from .logging_config import get_logger, setup_logging
from .utils import load_document

logger = get_logger(__name__)

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="jfr-codegen",
        description="Generate JfrUnit event classes from a JFR metadata document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jfr-codegen jdk21-events.json --output src/main/java
  jfr-codegen https://example.org/jdk21-events.json --package org.example.events
  jfr-codegen --plan
        """.strip(),
    )

    parser.add_argument(
        "locator",
        nargs="?",
        help="Path or URL of the events document (default: bundled sample)",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Source root to write generated files to (default: src/main/java)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument("--package", metavar="NAME", help="Package of the generated sources")
    parser.add_argument(
        "--registry-name", metavar="NAME", help="Class name of the event type registry"
    )
    parser.add_argument(
        "--template-dir", metavar="DIR", help="Directory with replacement templates"
    )
    parser.add_argument(
        "--plan",
        action="store_true",
        help="Show the artifacts that would be generated and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    overrides = {
        "output_dir": args.output,
        "package_name": args.package,
        "registry_name": args.registry_name,
        "template_dir": args.template_dir,
    }
    config = load_config(custom_config=overrides, config_file=args.config)

    for warning in ConfigManager().validate_config(config):
        console.print(f"[yellow]⚠️ {warning}[/yellow]")
        logger.warning("Configuration warning: %s", warning)

    return config


def _show_plan(config: GeneratorConfig, locator: str | None) -> int:
    document = load_document(resolve_locator(locator), timeout=config.timeout)
    entries = ArtifactPlanner(config).plan(document)

    table = Table(
        title=f"📋 Artifacts for {document.distribution} {document.version}".rstrip(),
        box=box.ROUNDED,
        title_style="bold cyan",
    )
    table.add_column("Kind", style="bold green", no_wrap=True)
    table.add_column("Qualified name", style="cyan")
    table.add_column("Template", style="dim")

    for entry in entries:
        table.add_row(entry.kind.value, entry.qualified_name, entry.template_name)

    console.print(table)
    console.print(f"\n📊 {len(entries)} artifact(s) planned")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the generator.

    Args:
        argv: Command line arguments (``sys.argv`` by default).

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = create_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        config = _build_config(args)

        if args.plan:
            return _show_plan(config, args.locator)

        filer = DirectoryFiler(
            Path(config.output_dir), config.file_extension, config.encoding
        )
        result = GenerationDriver(config, filer).run(args.locator)

    except ConfigError as e:
        console.print(f"[red]✗ Configuration error:[/red] {e}")
        return 1
    except GenerationError as e:
        console.print(f"[red]✗ Generation failed:[/red] {e}")
        cause = e.__cause__
        while cause is not None:
            console.print(f"[dim]  caused by: {cause}[/dim]")
            cause = cause.__cause__
        return 1

    console.print(
        f"✅ [green]Generated {result.artifact_count} source file(s) "
        f"in {result.destination}[/green]"
    )
    if result.skipped_types:
        console.print(f"[dim]Primitive types skipped: {', '.join(result.skipped_types)}[/dim]")
    return 0
