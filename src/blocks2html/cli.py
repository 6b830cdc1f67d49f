"""CLI interface for blocks2html."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from blocks2html import __version__
from blocks2html.block_content import to_tree
from blocks2html.errors import Blocks2HtmlError
from blocks2html.ingest.json_io import atomic_write_text, content_to_json
from blocks2html.ingest.source import JsonFileSource, render_documents, select_content
from blocks2html.keys import resolve_key_generator
from blocks2html.migration import migrate
from blocks2html.model.nodes import tree_to_dicts
from blocks2html.model.render_options import HtmlRenderOptions

app = typer.Typer(
    name="blocks2html",
    help="Render block content JSON into HTML or nested content trees.",
    no_args_is_help=True,
)

InputArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to a JSON file with block content or an API response ({'result': ...})",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]

OutOption = Annotated[
    Path | None,
    typer.Option("--out", help="Write output to this file instead of stdout"),
]

KeysOption = Annotated[
    bool,
    typer.Option(
        "--deterministic-keys/--random-keys",
        help="Derive migrated mark keys from mark values (stable across runs) instead of random ids",
    ),
]


def _emit(output: str, out: Path | None) -> None:
    if out is None:
        typer.echo(output)
        return
    atomic_write_text(out, output if output.endswith("\n") else output + "\n")
    typer.echo(f"✅ Wrote {out}")


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


@app.command()
def render(
    input_path: InputArgument,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: 'html' or 'tree' (JSON content tree)"),
    ] = "html",
    charset: Annotated[
        str,
        typer.Option("--charset", help="Charset used when escaping text (default: utf-8)"),
    ] = "utf-8",
    project_id: Annotated[
        str | None,
        typer.Option("--project-id", help="Project ID, required for CDN image URLs"),
    ] = None,
    dataset: Annotated[
        str | None,
        typer.Option("--dataset", help="Dataset name, required for CDN image URLs"),
    ] = None,
    image_option: Annotated[
        list[str] | None,
        typer.Option(
            "--image-option",
            help="Image URL query parameter as key=value (repeatable, order is kept)",
        ),
    ] = None,
    field: Annotated[
        str | None,
        typer.Option(
            "--field",
            help="Render this block content field of each fetched document "
            "(default: the file holds block content directly)",
        ),
    ] = None,
    deterministic_keys: KeysOption = False,
    out: OutOption = None,
) -> None:
    """
    Render block content from a JSON file.

    Examples:

        # Render a block content array to HTML
        blocks2html render post-body.json

        # Render the `body` field of every document in an API response
        blocks2html render response.json --field body --project-id abc123 --dataset prod \\
            --image-option w=320 --image-option fit=crop

        # Inspect the intermediate content tree
        blocks2html render post-body.json --format tree --deterministic-keys
    """
    if output_format not in ["html", "tree"]:
        raise _fail(f"--format must be 'html' or 'tree', got '{output_format}'")

    try:
        options = HtmlRenderOptions.from_cli(
            charset=charset,
            project_id=project_id,
            dataset=dataset,
            image_options=image_option or [],
        )
    except ValueError as exc:
        raise _fail(str(exc)) from exc

    source = JsonFileSource(input_path)
    try:
        if output_format == "html":
            output = "\n".join(render_documents(source, "*", field=field, options=options))
        else:
            key_generator = resolve_key_generator(deterministic_keys)
            trees = [
                tree_to_dicts(to_tree(content, key_generator=key_generator))
                for content in select_content(source.fetch("*"), field)
            ]
            output = content_to_json(trees if field is not None else trees[0])
    except Blocks2HtmlError as exc:
        raise _fail(str(exc)) from exc

    _emit(output, out)


@app.command("migrate")
def migrate_command(
    input_path: InputArgument,
    deterministic_keys: KeysOption = False,
    out: OutOption = None,
) -> None:
    """Upgrade legacy block content (flat spans) to the current children/markDefs format."""
    source = JsonFileSource(input_path)
    try:
        migrated = migrate(
            source.fetch("*"), key_generator=resolve_key_generator(deterministic_keys)
        )
    except Blocks2HtmlError as exc:
        raise _fail(str(exc)) from exc

    _emit(content_to_json(migrated), out)


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"blocks2html version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"blocks2html version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log pipeline decisions to stderr"),
    ] = False,
) -> None:
    """
    blocks2html - Render block content documents into HTML.

    Block content stores rich text as flat blocks of spans with overlapping
    mark ranges. This tool migrates legacy blocks, rebuilds the nested markup
    tree and renders it through the default serializers.

    For detailed usage, run: blocks2html render --help
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            force=True,
        )


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
