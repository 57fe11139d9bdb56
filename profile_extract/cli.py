#!/usr/bin/env python3
"""
CLI for profile extraction.

Usage:
    # Extract one section from a saved page or a live URL
    python -m profile_extract.cli experience saved_profile.html
    python -m profile_extract.cli education https://www.linkedin.com/in/someone/

    # Every section
    python -m profile_extract.cli all saved_profile.html

    # A saved detail page (e.g. /details/experience/) instead of the overview
    python -m profile_extract.cli experience saved_experience.html --detail

    # Ask the LLM for new selectors when a section comes back empty
    python -m profile_extract.cli heal experience saved_profile.html

    # Selector registry
    python -m profile_extract.cli selectors show
    python -m profile_extract.cli selectors save selectors.json

Sections: experience, education, accomplishment, patent, interest, about,
top-card, contact.

A selectors file at $SELECTOR_FILE (default: selectors.json) is loaded and
activated on startup when present.
"""

import asyncio
import sys
from pathlib import Path
from typing import List, Tuple

from rich.console import Console
from rich.table import Table

from .browser import open_document, load_html_file
from .config import Config
from .exceptions import ProfileExtractError, SelectorFileError
from .health import build_health_report
from .models import PipelineResult
from .nodes import Node, Navigator
from .registry import selector_registry
from .sections import SECTION_SETUPS, ACCOMPLISHMENT_SECTIONS, run_section, heal_section
from .self_heal import LlmSelfHealProvider

console = Console()

MAX_CELL = 60

STATUS_STYLES = {'healthy': 'green', 'degraded': 'yellow', 'broken': 'red'}


def _cell(value) -> str:
    if value is None:
        return ''
    if isinstance(value, list):
        return f"{len(value)} items"
    text = ' '.join(str(value).split())
    return text if len(text) <= MAX_CELL else text[:MAX_CELL - 1] + '…'


def print_records(title: str, records: list):
    """Records as a rich table, one column per field."""
    if not records:
        console.print(f"[dim]No {title} records[/dim]")
        return

    rows = [record.to_dict() for record in records]
    columns = [key for key in rows[0] if key != 'plain_text']

    table = Table(title=title)
    for key in columns:
        table.add_column(key.replace('_', ' ').title())
    for row in rows:
        table.add_row(*[_cell(row.get(key)) for key in columns])
    console.print(table)


def print_health(results: List[Tuple[str, PipelineResult]]):
    table = Table(title="Section health")
    for column in ("Section", "Status", "Extractor", "Confidence", "Items", "Failed", "Message"):
        table.add_column(column)

    for label, result in results:
        report = build_health_report(label, result)
        status = report.status.value
        table.add_row(
            label,
            f"[{STATUS_STYLES[status]}]{status}[/]",
            report.extractor or '-',
            f"{report.confidence:.2f}",
            str(report.item_count),
            str(result.diagnostics.items_failed),
            report.message,
        )
    console.print(table)


async def collect(section: str, document: Node, base_url: str, navigator: Navigator,
                  detail_view: bool = False) -> List[Tuple[str, PipelineResult]]:
    """(label, result) per pipeline run for a section name or "all"."""
    sections = list(SECTION_SETUPS) if section == 'all' else [section]
    results = []

    for name in sections:
        if name == 'accomplishment':
            for url_path, category, heading in ACCOMPLISHMENT_SECTIONS:
                result = await run_section(
                    name, document, base_url, navigator, detail_view=detail_view,
                    url_path=url_path, category=category, heading=heading,
                )
                results.append((category, result))
        else:
            results.append((name, await run_section(name, document, base_url, navigator, detail_view=detail_view)))

    return results


async def with_document(source: str, base_url: str, handler):
    """Open a URL with playwright or a file with BeautifulSoup and run handler(document, base_url, navigator)."""
    if source.startswith(('http://', 'https://')):
        async with open_document(source) as (document, navigator):
            return await handler(document, base_url or source, navigator)

    if not Path(source).exists():
        raise ProfileExtractError(f"File not found: {source}")
    document, navigator = load_html_file(source)
    return await handler(document, base_url, navigator)


async def cmd_section(section: str, args):
    """Extract a section (or "all") and print records plus health."""
    detail_view = "--detail" in args
    args = [a for a in args if a != "--detail"]

    if len(args) < 1:
        print(f"Usage: python -m profile_extract.cli {section} <html-file | url> [base-url] [--detail]")
        return

    source = args[0]
    base_url = args[1] if len(args) > 1 else ''

    async def run(document, url, navigator):
        return await collect(section, document, url, navigator, detail_view)

    results = await with_document(source, base_url, run)

    for label, result in results:
        print_records(label, result.items)
    print_health(results)


async def cmd_heal(args):
    """Run self-heal for a section and activate the proposed selectors."""
    if len(args) < 2 or args[0] not in SECTION_SETUPS:
        print("Usage: python -m profile_extract.cli heal <section> <html-file | url>")
        return

    section, source = args[0], args[1]

    async def run(document, url, navigator):
        version = await heal_section(document, section, LlmSelfHealProvider())
        if version is None:
            return None
        console.print(f"[green]✓[/green] Activated selector version {version.version}")
        for label, result in await collect(section, document, url, navigator):
            print_records(label, result.items)
        return version

    version = await with_document(source, '', run)
    if version is None:
        console.print(f"[red]✗[/red] Self-heal produced no selectors for {section}")
        return

    if selector_registry.save_to_file(Config.SELECTOR_FILE, version.version):
        console.print(f"Saved to: {Config.SELECTOR_FILE}")


async def cmd_selectors(args):
    """Show or save the active selector version."""
    action = args[0] if args else 'show'

    if action == 'show':
        version = selector_registry.get_active_version()
        table = Table(title=f"Selectors {version.version} ({version.updated_at})")
        table.add_column("Section")
        table.add_column("Item selectors")
        table.add_column("Containers")
        for name, selectors in version.sections.items():
            table.add_row(name, '\n'.join(selectors.item_selectors), '\n'.join(selectors.container_selectors or []))
        console.print(table)
        console.print(f"Registered versions: {', '.join(selector_registry.versions())}")

    elif action == 'save':
        path = args[1] if len(args) > 1 else Config.SELECTOR_FILE
        selector_registry.save_to_file(path)
        console.print(f"Saved {selector_registry.active_version_id} to: {path}")

    else:
        print("Usage: python -m profile_extract.cli selectors show|save [path]")


async def cmd_help():
    """Print help."""
    print(__doc__)


def load_selector_file():
    path = Path(Config.SELECTOR_FILE)
    if not path.exists():
        return
    try:
        selector_registry.load_from_file(path)
    except SelectorFileError as e:
        console.print(f"[yellow]⚠ {e}; using built-in selectors[/yellow]")


async def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        await cmd_help()
        return

    command = argv[0]
    args = argv[1:]

    load_selector_file()

    commands = {
        "heal": cmd_heal,
        "selectors": cmd_selectors,
        "help": lambda _: cmd_help(),
    }
    for section in list(SECTION_SETUPS) + ['all']:
        commands[section] = lambda a, s=section: cmd_section(s, a)

    if command not in commands:
        print(f"Unknown command: {command}")
        await cmd_help()
        return

    try:
        await commands[command](args)
    except ProfileExtractError as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
