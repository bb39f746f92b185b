#!/usr/bin/env python3
"""
CLI for importing recipes from a text file.

Usage:
    recipe-ingest path/to/cookbook.txt
    recipe-ingest path/to/notes.txt --output recipes.json --provider openrouter
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import IngestionSettings, PROVIDERS
from .exceptions import RecipeIngestionError
from .services.formatting import format_summary
from .services.pipeline import IngestionResult, ingest_text

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )

    logging.getLogger().setLevel(log_level)

    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("openai").setLevel(logging.WARNING)


def _print_result(result: IngestionResult) -> None:
    """Pretty-print the imported recipes and any failed chunks."""
    status = "[yellow]cancelled[/yellow]" if result.cancelled else "[green]done[/green]"
    console.print(
        f"\n  {status}  [bold]{len(result.recipes)}[/bold] recipe(s) "
        f"from {result.chunk_count} section(s)"
    )

    table = Table(show_header=True, header_style="bold", padding=(0, 1))
    table.add_column("#", justify="right")
    table.add_column("Title", min_width=24)
    table.add_column("Category")
    table.add_column("Ingredients", justify="right")
    table.add_column("Steps", justify="right")
    table.add_column("Prep/Cook", justify="right")
    table.add_column("Appliance", max_width=40)

    for index, recipe in enumerate(result.recipes, 1):
        actions = [format_summary(step.cookingAction) for step in recipe.steps if step.cookingAction]
        table.add_row(
            str(index),
            recipe.title,
            recipe.category,
            str(len(recipe.ingredients)),
            str(len(recipe.steps)),
            f"{recipe.prepTime}/{recipe.cookTime} min",
            " | ".join(a for a in actions if a),
        )
    console.print(table)

    for failure in result.errors:
        console.print(
            f"  [red]FAILED[/red] section {failure.chunk_index + 1}: {failure.reason} ({failure.message})"
        )


async def main_async(args: argparse.Namespace) -> int:
    """Read the input file, run the import and write the result."""
    input_path = Path(args.input)
    if not input_path.is_file():
        logging.error(f"Input file not found: {input_path}")
        return 1

    text = input_path.read_text(encoding="utf-8")
    logging.info(f"Read {len(text)} chars from {input_path}")

    progress_callback = None
    if not args.quiet:
        async def progress_callback(message: str, found: int, total: int):
            console.print(f">>> {message} ({found}/~{total})")

    try:
        settings = IngestionSettings.from_env(provider=args.provider)
        result = await ingest_text(text, settings, progress_callback=progress_callback)
    except (RecipeIngestionError, ValueError) as e:
        logging.error(f"Import failed: {e}")
        return 1

    _print_result(result)

    payload = json.dumps(
        [recipe.model_dump(exclude_none=True) for recipe in result.recipes],
        indent=2,
        ensure_ascii=False,
    )
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        console.print(f"\n  Saved to [bold]{args.output}[/bold]")
    else:
        print(payload)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line interface."""
    parser = argparse.ArgumentParser(
        description="Extract structured recipes from a text file (OCR output, PDF text, notes)"
    )

    parser.add_argument(
        "input",
        help="UTF-8 text file to import"
    )

    parser.add_argument(
        "--output", "-o",
        help="Write the recipes as JSON to this file instead of stdout"
    )

    parser.add_argument(
        "--provider",
        choices=list(PROVIDERS),
        default=None,
        help="LLM provider (default: RECIPE_LLM_PROVIDER or gemini)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging with detailed information"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Disable progress updates"
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    return asyncio.run(main_async(args))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
