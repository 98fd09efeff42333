"""CLI entrypoints for inspecting and rendering Folio content."""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Annotated, Iterator, NoReturn, Sequence

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .components import ComponentRenderError, InvalidQuizDefinition, default_registry
from .config import CONFIG_FILENAME, Config, load_config
from .content import ContentMeta
from .rendering import ComponentMarkupError, RenderPipeline, UnknownComponentError
from .repository import ContentRepository, DuplicateIdentifierError
from .storage import CollectionNotFound, DocumentReadFailure

console = Console()
app = typer.Typer(help="Folio content repository toolkit.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]
CollectionArgument = Annotated[str, typer.Argument(..., help="Collection name, e.g. 'posts'.")]
SlugArgument = Annotated[str, typer.Argument(..., help="Document slug (filename without extension).")]


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show diagnostic log output."),
    ] = False,
    show_version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Print the Folio version and exit.",
        ),
    ] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("list")
def list_documents(
    collection: CollectionArgument,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=0, help="Show only the most recent N documents."),
    ] = None,
    page: Annotated[
        int | None,
        typer.Option("--page", "-p", min=1, help="Show one page of the listing."),
    ] = None,
    config_path: ConfigPathOption = CONFIG_FILENAME,
) -> None:
    """List documents in a collection, most recent first."""
    if limit is not None and page is not None:
        raise typer.BadParameter("--limit cannot be combined with --page.", param_hint="--limit")
    repository = _repository(_load(config_path))
    with _collection_errors():
        if page is not None:
            listing = repository.page(collection, page)
            _print_listing(f"{collection} (page {listing.number}/{listing.total_pages})", listing.items)
            return
        _print_listing(collection, repository.list(collection, limit=limit))


@app.command()
def search(
    collection: CollectionArgument,
    query: Annotated[str, typer.Argument(..., help="Text to look for in document titles.")],
    config_path: ConfigPathOption = CONFIG_FILENAME,
) -> None:
    """Filter a collection by title."""
    repository = _repository(_load(config_path))
    with _collection_errors():
        results = repository.search(collection, query)
    if not results:
        console.print(f"[bold yellow]No matches[/] for '{query}' in {collection}.")
        raise typer.Exit()
    _print_listing(collection, results)


@app.command()
def show(
    collection: CollectionArgument,
    slug: SlugArgument,
    config_path: ConfigPathOption = CONFIG_FILENAME,
) -> None:
    """Print a document's metadata."""
    repository = _repository(_load(config_path))
    with _collection_errors():
        document = repository.get(collection, slug)
    if document is None:
        _not_found(collection, slug)

    meta = document.meta
    console.print(f"[bold]{meta.title or meta.slug}[/]")
    if meta.byline:
        console.print(meta.byline)
    if meta.summary:
        console.print(meta.summary)
    if meta.hero_image:
        console.print(f"[bold blue]Image[/]: {meta.hero_image}")
    for key, value in sorted(meta.extra_fields.items()):
        console.print(f"[bold blue]{key}[/]: {value}")


@app.command()
def render(
    collection: CollectionArgument,
    slug: SlugArgument,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write HTML to this file instead of stdout."),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--lenient", help="Override the configured component strictness."),
    ] = None,
    config_path: ConfigPathOption = CONFIG_FILENAME,
) -> None:
    """Render a document body to HTML."""
    config = _load(config_path)
    repository = _repository(config)
    with _collection_errors():
        document = repository.get(collection, slug)
    if document is None:
        _not_found(collection, slug)

    pipeline = RenderPipeline(
        default_registry(),
        strict=config.strict_components if strict is None else strict,
    )
    try:
        rendered = pipeline.render_document(document)
    except (
        ComponentMarkupError,
        ComponentRenderError,
        InvalidQuizDefinition,
        UnknownComponentError,
    ) as exc:
        console.print(f"[bold red]Render failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(rendered.html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered.html, encoding="utf-8")
    used = ", ".join(dict.fromkeys(rendered.components)) or "none"
    console.print(f"[bold green]Rendered[/]: {output} (components: {used})")


@contextlib.contextmanager
def _collection_errors() -> Iterator[None]:
    """Translate repository failures into CLI exits."""
    try:
        yield
    except (CollectionNotFound, DocumentReadFailure, DuplicateIdentifierError) as exc:
        console.print(f"[bold red]Error[/]: {exc}")
        raise typer.Exit(code=1) from exc


def _load(config_path: str) -> Config:
    try:
        return load_config(config_path)
    except FileNotFoundError as exc:
        console.print(f"[bold red]Config not found[/]: {config_path}")
        raise typer.Exit(code=1) from exc
    except (ValueError, ValidationError) as exc:
        console.print(f"[bold red]Invalid config[/]: {exc}")
        raise typer.Exit(code=1) from exc


def _repository(config: Config) -> ContentRepository:
    return ContentRepository(
        config.create_store(),
        page_size=config.page_size,
        recent_limit=config.recent_limit,
    )


def _not_found(collection: str, slug: str) -> NoReturn:
    console.print(f"[bold red]Not found[/]: no document '{slug}' in {collection}.")
    raise typer.Exit(code=1)


def _print_listing(title: str, records: Sequence[ContentMeta]) -> None:
    table = Table(title=title)
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Date", style="green")
    for meta in records:
        table.add_row(meta.slug, meta.title or "", meta.display_date or "")
    console.print(table)


if __name__ == "__main__":
    app()
