#!/usr/bin/env python3
"""
Command line manager for the Hanzi knowledge base.

    hanzi-manager import --source data/dictionary.txt --reference data/hsk_metadata.json
    hanzi-manager lookup 好
    hanzi-manager components 好 --format json
    hanzi-manager stats
    hanzi-manager backup --output backups/hanzi.db
"""
import argparse
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.box import ROUNDED as box_ROUNDED
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hanzi_backend import api
from hanzi_backend.dictionary_manager.exceptions import DictionaryError, ImportFailure
from hanzi_backend.dictionary_manager.record_types import UnresolvedComponent
from hanzi_backend.dictionary_manager.text_helpers import get_top_level_operator
from hanzi_backend.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

console = Console()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build and query the Hanzi character knowledge base."
    )
    parser.add_argument(
        "--database-url", type=str, help="SQLAlchemy URL of the knowledge base (default: DATABASE_URL)"
    )
    parser.add_argument(
        "--log-level", type=str, help="Logging level for the log file (default: LOG_LEVEL)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # --- Import Command ---
    import_parser = subparsers.add_parser(
        "import", help="Rebuild the knowledge base from the dictionary and reference table"
    )
    import_parser.add_argument(
        "--source", type=str, help="Line-delimited JSON dictionary (default: DICTIONARY_PATH)"
    )
    import_parser.add_argument(
        "--reference", type=str, help="Reference table JSON (default: REFERENCE_TABLE_PATH)"
    )
    import_parser.add_argument(
        "--no-progress", action="store_true", help="Do not show a progress bar"
    )

    # --- Lookup Command ---
    lookup_parser = subparsers.add_parser("lookup", help="Look up a character")
    lookup_parser.add_argument("character", help="Character to look up")
    lookup_parser.add_argument(
        "--format", choices=["text", "json", "rich"], default="rich", help="Output format"
    )

    # --- Components Command ---
    components_parser = subparsers.add_parser(
        "components", help="Resolve the constituents of a character's decomposition"
    )
    components_parser.add_argument(
        "character", nargs="?", help="Character whose stored decomposition is resolved"
    )
    components_parser.add_argument(
        "--decomposition", type=str, help="Resolve this descriptor instead of a stored one"
    )
    components_parser.add_argument(
        "--format", choices=["text", "json", "rich"], default="rich", help="Output format"
    )

    # --- Stats Command ---
    stats_parser = subparsers.add_parser("stats", help="Display knowledge base statistics")
    stats_parser.add_argument(
        "--format", choices=["json", "rich"], default="rich", help="Output format"
    )

    # --- Backup Command ---
    backup_parser = subparsers.add_parser("backup", help="Snapshot the knowledge base")
    backup_parser.add_argument(
        "--output", type=str, help="Backup file (default: backups/hanzi_<timestamp>.db)"
    )

    return parser


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------

def import_dictionary(args) -> int:
    """Run a full import and report the committed row count."""
    logger.info(f"Import called with args: {args}")
    try:
        count = api.run_import(
            args.source,
            args.reference,
            database_url=args.database_url,
            show_progress=False if args.no_progress else None,
        )
    except ImportFailure as e:
        logger.error(f"Import failed: {e}")
        console.print(f"\n[bold red]Import failed, nothing was committed:[/] {escape(str(e))}")
        return EXIT_FAILURE

    console.print(f"[bold green]Import complete:[/] {count:,} characters committed.")
    return EXIT_OK


def _print_character(data: Dict[str, Any], output_format: str) -> None:
    if output_format == 'json':
        print(json.dumps(data, indent=2, ensure_ascii=False))
    elif output_format == 'text':
        print(f"--- {data['character']} (ID: {data['id']}) ---")
        for key in ['pinyin', 'definition', 'radical', 'hsk_level', 'stroke_count',
                    'script_type', 'decomposition', 'variants', 'radical_variants']:
            if data.get(key) not in (None, ''):
                print(f"{key.replace('_', ' ').title()}: {data[key]}")
        if data.get('is_radical'):
            print("Radical: yes")
    else:
        content = Text()
        content.append(f"{data['character']}\n", style="bold cyan")
        content.append(f"Pinyin: {data['pinyin'] or '---'}\n")
        content.append(f"Definition: {data['definition'] or '---'}\n")
        content.append(f"Radical: {data['radical'] or '---'}")
        if data['is_radical']:
            content.append(" (is radical)", style="magenta")
        content.append("\n")
        content.append(f"HSK Level: {data['hsk_level'] if data['hsk_level'] is not None else '---'}\n")
        content.append(f"Strokes: {data['stroke_count'] if data['stroke_count'] is not None else '---'}\n")
        content.append(f"Script: {data['script_type'] or '---'}\n")
        content.append(f"Decomposition: {data['decomposition'] or '---'}\n")
        if data['variants']:
            content.append(f"Variants: {data['variants']}\n")
        if data['radical_variants']:
            content.append(f"Radical Variants: {data['radical_variants']}\n")
        console.print(Panel(content, title=f"[bold cyan]Character Info - ID: {data['id']}[/]"))


def lookup_character(args) -> int:
    record = api.lookup(args.character, database_url=args.database_url)
    if record is None:
        logger.info(f"Character not found: {args.character}")
        if args.format == 'json':
            print(json.dumps({'character': args.character, 'found': False}, ensure_ascii=False))
        else:
            console.print(f"[yellow]Character '{escape(args.character)}' not found.[/]")
        return EXIT_NOT_FOUND

    _print_character(record.to_dict(), args.format)
    return EXIT_OK


def _component_dicts(components: List[Any]) -> List[Dict[str, Any]]:
    result = []
    for item in components:
        if isinstance(item, UnresolvedComponent):
            result.append(item.to_dict())
        else:
            result.append(dict(item.to_dict(), resolved=True))
    return result


def show_components(args) -> int:
    if args.decomposition is not None:
        descriptor = args.decomposition
        components = api.resolve_decomposition(descriptor, database_url=args.database_url)
    elif args.character:
        result = api.get_character_components(args.character, database_url=args.database_url)
        if result is None:
            console.print(f"[yellow]Character '{escape(args.character)}' not found.[/]")
            return EXIT_NOT_FOUND
        record, components = result
        descriptor = record.decomposition
    else:
        console.print("[red]Give a character or --decomposition.[/]")
        return EXIT_FAILURE

    items = _component_dicts(components)

    if args.format == 'json':
        print(json.dumps({'decomposition': descriptor, 'components': items}, indent=2, ensure_ascii=False))
        return EXIT_OK

    if not items:
        console.print("[yellow]No decomposition.[/]")
        return EXIT_OK

    operator = get_top_level_operator(descriptor)
    layout = operator.name.replace('_', ' ').lower() if operator else "single component"

    if args.format == 'text':
        print(f"{descriptor} ({layout})")
        for item in items:
            if item['resolved']:
                print(f"- {item['character']} {item['pinyin']} {item['definition']}")
            else:
                print(f"- {item['character']} (unresolved)")
        return EXIT_OK

    table = Table(title=f"Components of {escape(descriptor)} ({layout})", box=box_ROUNDED)
    table.add_column("Character", style="cyan")
    table.add_column("Pinyin", style="green")
    table.add_column("HSK", justify="right")
    table.add_column("Definition")
    for item in items:
        if item['resolved']:
            level = item['hsk_level']
            table.add_row(
                item['character'],
                item['pinyin'],
                str(level) if level is not None else "",
                escape(item['definition']),
            )
        else:
            table.add_row(escape(item["character"]), "", "", "[dim]unresolved[/]")
    console.print(table)
    return EXIT_OK


def display_stats(args) -> int:
    stats = api.get_dictionary_stats(database_url=args.database_url)

    if args.format == 'json':
        print(json.dumps(stats, indent=2, ensure_ascii=False, default=str))
        return EXIT_OK

    stats_table = Table(title="Knowledge Base Statistics", box=box_ROUNDED)
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Count", justify="right", style="green")
    stats_table.add_row("Total Characters", f"{stats['total']:,}")
    stats_table.add_row("Radicals", f"{stats['radicals']:,}")
    stats_table.add_row("With Decomposition", f"{stats['with_decomposition']:,}")
    for level, count in stats['by_hsk_level'].items():
        label = f"HSK {level}" if level is not None else "No HSK Level"
        stats_table.add_row(label, f"{count:,}")
    for script, count in stats['by_script_type'].items():
        stats_table.add_row(f"Script: {script or 'unknown'}", f"{count:,}")
    console.print(stats_table)
    return EXIT_OK


def backup(args) -> int:
    output = args.output or os.path.join(
        "backups", f"hanzi_{datetime.now().strftime('%Y%m%d_%H%M%S')}.db"
    )
    path = api.backup_database(output, database_url=args.database_url)
    console.print(f"[bold green]Backup written to[/] {path}")
    return EXIT_OK


# -------------------------------------------------------------------
# Main entry point
# -------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    command_handlers = {
        "import": import_dictionary,
        "lookup": lookup_character,
        "components": show_components,
        "stats": display_stats,
        "backup": backup,
    }

    try:
        return command_handlers[args.command](args)
    except DictionaryError as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return EXIT_FAILURE


def run() -> None:
    """Console script entry point."""
    args = create_argument_parser().parse_known_args()[0]
    setup_logging(level=args.log_level)
    sys.exit(main())


if __name__ == "__main__":
    run()
