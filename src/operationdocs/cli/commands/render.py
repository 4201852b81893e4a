"""Implementation of the `operationdocs render` command."""

from __future__ import annotations

from pathlib import Path

import typer

from ...exceptions import OperationDocsError
from ...markdown import render_markdown, resolve_markdown_extensions
from ..diagnostics import CliEmitter
from ..state import debug_enabled, emit_error, get_cli_state, render_message
from ..utils import parse_attribute_options, write_output_file


def render(
    input_path: Path = typer.Argument(
        ...,
        metavar="INPUT",
        help="Markdown document containing operation:: macros.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the HTML to this file instead of stdout.",
    ),
    snippets_dir: Path | None = typer.Option(
        None,
        "--snippets",
        "-s",
        help="Directory holding one folder of generated snippets per operation.",
    ),
    suffix: str = typer.Option(
        ".md",
        "--suffix",
        help="File extension of generated snippets.",
    ),
    attributes: list[str] = typer.Option(
        [],
        "--attribute",
        "-a",
        help="Document attribute as name=value (repeatable).",
    ),
    extensions: list[str] = typer.Option(
        [],
        "--extension",
        "-x",
        help="Additional Markdown extension to enable (repeatable).",
    ),
    disabled: list[str] = typer.Option(
        [],
        "--disable-extension",
        help="Markdown extension to remove from the default list (repeatable).",
    ),
    build_tool: str | None = typer.Option(
        None,
        "--build-tool",
        help="Snippet layout used when --snippets is omitted: maven or gradle.",
    ),
) -> None:
    """Render a Markdown document to HTML, expanding operation snippets."""
    document_attributes = {
        "docdir": str(input_path.parent),
        "projectdir": str(Path.cwd()),
        **parse_attribute_options(attributes),
    }
    if build_tool not in (None, "maven", "gradle"):
        raise typer.BadParameter("expected 'maven' or 'gradle'", param_hint="--build-tool")

    config = {
        "snippets": str(snippets_dir) if snippets_dir is not None else "",
        "suffix": suffix,
        "attributes": document_attributes,
        "build_tool": build_tool or "",
        "source": str(input_path),
        "emitter": CliEmitter(),
    }

    try:
        document = render_markdown(
            input_path.read_text(encoding="utf-8"),
            resolve_markdown_extensions(extensions, disabled),
            operation_config=config,
        )
    except OperationDocsError as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(document.html)
    else:
        write_output_file(output, document.html)

    state = get_cli_state()
    if state.verbosity >= 1:
        render_message(
            "info",
            f"{len(document.anchors)} anchor(s), {state.warning_count} warning(s)",
        )


__all__ = ["render"]
