# filesets/cli/console_output.py
"""
Handles printing fileset listings and merge results to the console.
"""
from typing import Dict, List

import click
from rich.console import Console as RichConsole
from rich.table import Table

from filesets.logging_setup import get_logger

log = get_logger(__name__)

def print_file_list(files: List[str]) -> None:
    for file in files:
        click.echo(file)

def print_merge_result(merged: Dict[str, str], output_format: str = "plain") -> None:
    """
    Prints relative path -> root pairs.

    'plain' writes tab-separated lines on stdout; 'table' renders a rich table.
    """
    log.debug("console_merge_output_requested", entries=len(merged), output_format=output_format)

    if output_format == "table":
        table = Table(title="Merged filesets", show_lines=False)
        table.add_column("Relative path", style="cyan", no_wrap=True)
        table.add_column("Root", style="green")
        for relative_path, root in merged.items():
            table.add_row(relative_path, root)
        RichConsole().print(table)
        return

    for relative_path, root in merged.items():
        click.echo(f"{relative_path}\t{root}")

def print_summary(count: int, roots: List[str]) -> None:
    click.secho("--- fileset summary ---", fg="cyan", err=True)
    click.echo(f"Entries: {count} (from {len(roots)} root{'s' if len(roots) != 1 else ''})", err=True)
