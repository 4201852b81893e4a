"""Implementation of the `operationdocs snippets` command."""

from __future__ import annotations

from pathlib import Path

from rich import box
from rich.table import Table
import typer

from ...selection import select_snippets
from ...titles import SnippetTitles
from ..state import get_cli_state
from ..utils import parse_attribute_options


def snippets(
    operation: str = typer.Argument(..., help="Name of the documented operation."),
    snippets_dir: Path = typer.Option(
        Path("."),
        "--snippets",
        "-s",
        help="Directory holding one folder of generated snippets per operation.",
    ),
    only: str | None = typer.Option(
        None,
        "--only",
        help="Comma separated snippet names, in display order.",
    ),
    suffix: str = typer.Option(".md", "--suffix", help="File extension of generated snippets."),
    attributes: list[str] = typer.Option(
        [],
        "--attribute",
        "-a",
        help="Document attribute as name=value, e.g. operation-links-title=Relations.",
    ),
) -> None:
    """List the snippets an operation:: macro would include."""
    state = get_cli_state()
    selected = select_snippets(operation, snippets_dir, only, suffix=suffix)
    if not selected:
        state.console.print(
            f"[dim]No snippets were found for operation {operation} in {snippets_dir}[/]"
        )
        raise typer.Exit(code=1)

    titles = SnippetTitles(parse_attribute_options(attributes))
    table = Table(title=f"operation::{operation}", box=box.SIMPLE_HEAVY)
    table.add_column("Snippet", style="bold", no_wrap=True)
    table.add_column("Title", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Present", justify="center", no_wrap=True)
    for snippet in selected:
        present = snippet.path.is_file()
        table.add_row(
            snippet.name,
            titles.title_for_snippet(snippet),
            str(snippet.path),
            "[green]yes[/]" if present else "[red]missing[/]",
        )
    state.console.print(table)


__all__ = ["snippets"]
