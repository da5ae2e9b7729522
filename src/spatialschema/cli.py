"""
spatialschema command line interface.

Commands:
  check      Parse schema files and report syntax errors
  tree       Print the syntax tree of one schema file
  highlight  Print one schema file colourised by syntax category
"""

import json
import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from spatialschema import __version__
from spatialschema.core.config import SchemaConfig, find_config, load_config
from spatialschema.core.errors import SchemaError
from spatialschema.core.fileset import discover_schema_files
from spatialschema.core.highlight import highlight_ranges
from spatialschema.core.parser import ParseResult, parse_file, parse_files
from spatialschema.core.syntax import HighlightCategory, SyntaxNode

console = Console()

CATEGORY_STYLES: dict[HighlightCategory, str] = {
    HighlightCategory.KEYWORD: "bold magenta",
    HighlightCategory.IDENTIFIER: "bold cyan",
    HighlightCategory.TYPE: "green",
    HighlightCategory.NUMBER: "yellow",
    HighlightCategory.STRING: "bright_green",
    HighlightCategory.METADATA: "bright_blue",
    HighlightCategory.ERROR: "bold red",
}


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"spatialschema version {__version__}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="spatialschema - error-tolerant parser for SpatialOS-style schema files",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """spatialschema CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_config(config: Path | None) -> SchemaConfig | None:
    if config is not None:
        return load_config(config.resolve())
    found = find_config(Path.cwd())
    return load_config(found) if found else None


def _parse_one(file: Path, config: Path | None) -> ParseResult:
    """Parse one file with the parser options of the given or discovered config."""
    cfg = _resolve_config(config)
    return parse_file(file, cfg.parser if cfg else None)


def _print_human(results: list[ParseResult]) -> None:
    total = sum(len(r.diagnostics) for r in results)
    for result in results:
        if result.diagnostics:
            typer.echo(result.format_diagnostics(with_snippets=True), err=True)
    if total:
        typer.echo(f"\nFound {total} error(s) in {len(results)} file(s).", err=True)
    else:
        typer.echo(f"OK: {len(results)} file(s) parsed without errors.")


def _print_vscode(results: list[ParseResult]) -> None:
    """Print diagnostics in VS Code format: file:line:col: severity: message"""
    for result in results:
        if result.diagnostics:
            typer.echo(result.format_diagnostics())
    if all(r.ok for r in results):
        typer.echo("::notice: Parse successful")


def _print_json(results: list[ParseResult]) -> None:
    payload = [
        {
            "file": str(r.file) if r.file else None,
            "diagnostics": [d.model_dump() for d in r.diagnostics],
        }
        for r in results
    ]
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def check(
    files: list[Path] | None = typer.Argument(  # noqa: B008
        None, help="Schema files to check (default: discover from config)"
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to schema.toml or pyproject.toml"
    ),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human', 'vscode' or 'json'"
    ),
) -> None:
    """
    Parse schema files and report every syntax error.

    Exits with code 1 if any file has errors.
    """
    if format not in ("human", "vscode", "json"):
        typer.echo(f"Error: unknown format '{format}'", err=True)
        raise typer.Exit(code=2)

    try:
        cfg = _resolve_config(config)
        if files:
            paths = list(files)
        elif cfg is not None:
            paths = discover_schema_files(cfg)
        else:
            typer.echo("Error: no files given and no schema.toml found", err=True)
            raise typer.Exit(code=1)
        results = parse_files(paths, cfg.parser if cfg else None)
    except SchemaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        _print_json(results)
    elif format == "vscode":
        _print_vscode(results)
    else:
        _print_human(results)

    if not all(r.ok for r in results):
        raise typer.Exit(code=1)


def _build_tree(node: SyntaxNode, branch: Tree) -> None:
    for child in node.children:
        if child.is_token:
            branch.add(Text(repr(child.text), style="dim"))
        elif child.is_error:
            sub = branch.add(Text(f"{child.kind} {child.message!r}", style="bold red"))
            _build_tree(child, sub)
        else:
            label = f"{child.kind} [{child.start}:{child.end}]"
            _build_tree(child, branch.add(label))


@app.command()
def tree(
    file: Path = typer.Argument(..., help="Schema file to parse"),  # noqa: B008
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to schema.toml or pyproject.toml"
    ),
    format: str = typer.Option("tree", "--format", "-f", help="Output format: 'tree' or 'json'"),
) -> None:
    """Print the syntax tree of a schema file."""
    if format not in ("tree", "json"):
        typer.echo(f"Error: unknown format '{format}'", err=True)
        raise typer.Exit(code=2)

    try:
        result = _parse_one(file, config)
    except SchemaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        typer.echo(result.tree.model_dump_json(indent=2))
        return

    root = Tree(f"{result.tree.kind} [{result.tree.start}:{result.tree.end}]")
    _build_tree(result.tree, root)
    console.print(root)


@app.command()
def highlight(
    file: Path = typer.Argument(..., help="Schema file to colourise"),  # noqa: B008
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to schema.toml or pyproject.toml"
    ),
) -> None:
    """Print a schema file with syntax highlighting."""
    try:
        result = _parse_one(file, config)
    except SchemaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    text = Text(result.text)
    for r in highlight_ranges(result.tree):
        text.stylize(CATEGORY_STYLES[r.category], r.start, r.end)
    for node in result.tree.errors():
        if node.end > node.start:
            text.stylize("underline red", node.start, node.end)
    console.print(text, soft_wrap=True)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
