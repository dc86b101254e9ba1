"""CLI interface for folio."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from folio.build import build_site, check_content
from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.content import (
    COLLECTION_SCHEMAS,
    CollectionLoader,
    is_published,
    render_frontmatter,
    resolve_collection,
    slugify,
    sort_by_publish_date,
)
from folio.errors import FolioError
from folio.render import format_date

app = typer.Typer(
    name="folio",
    help="Build a static portfolio and blog from Markdown collections.",
)

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .folio.toml file."),
]
ContentOption = Annotated[
    Optional[Path],
    typer.Option("--content", help="Content directory (overrides config)."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Folio - static portfolio and blog builder."""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(config_path: Path | None, **overrides: object) -> FolioConfig:
    try:
        config = merge_cli_overrides(load_config(config_path), **overrides)
    except FolioError as exc:
        raise _fail(exc) from exc
    _setup_logging(config.logging.level)
    return config


def _fail(exc: FolioError) -> typer.Exit:
    err_console.print(f"[bold red]Error:[/bold red] {exc}")
    return typer.Exit(code=1)


@app.command()
def build(
    config_path: ConfigOption = None,
    content: ContentOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory (overrides config)."),
    ] = None,
    clean: Annotated[
        bool, typer.Option("--clean", help="Remove the output directory first.")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
) -> None:
    """Build the site into the output directory."""
    config = _load(
        config_path,
        content_directory=content,
        output_directory=output,
        log_level="DEBUG" if verbose else None,
    )
    try:
        report = build_site(config, clean=clean)
    except FolioError as exc:
        raise _fail(exc) from exc

    table = Table(title="Build summary")
    table.add_column("Collection")
    table.add_column("Published", justify="right")
    for name, count in report.counts.items():
        table.add_row(name, str(count))
    console.print(table)
    console.print(
        f"[green]Wrote {report.pages} files to {report.output_dir}[/green] "
        f"({report.drafts_skipped} drafts skipped, {report.tags} tags)"
    )


@app.command("list")
def list_cmd(
    collection: Annotated[str, typer.Argument(help="Collection name, e.g. blog.")],
    config_path: ConfigOption = None,
    content: ContentOption = None,
    drafts: Annotated[
        bool, typer.Option("--drafts", help="Include draft records.")
    ] = False,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=0, help="Show only the newest N records."),
    ] = None,
) -> None:
    """List a collection, newest first."""
    config = _load(config_path, content_directory=content)
    loader = CollectionLoader(config.content_dir)
    try:
        records = loader.get_collection(collection, None if drafts else is_published)
    except FolioError as exc:
        raise _fail(exc) from exc

    records = sort_by_publish_date(records)
    if limit is not None:
        records = records[:limit]

    table = Table(title=f"{collection} ({len(records)})")
    table.add_column("Date")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Draft")
    for record in records:
        table.add_row(
            format_date(record.metadata.publish_date),
            record.slug,
            record.metadata.title,
            "yes" if record.metadata.draft else "",
        )
    console.print(table)


@app.command()
def check(
    config_path: ConfigOption = None,
    content: ContentOption = None,
) -> None:
    """Validate every content file without writing output."""
    config = _load(config_path, content_directory=content)
    try:
        counts = check_content(config)
    except FolioError as exc:
        raise _fail(exc) from exc

    for name, count in counts.items():
        console.print(f"{name}: {count} records OK")


@app.command()
def new(
    collection: Annotated[str, typer.Argument(help="Collection name, e.g. blog.")],
    title: Annotated[str, typer.Argument(help="Title of the new record.")],
    config_path: ConfigOption = None,
    content: ContentOption = None,
    draft: Annotated[
        bool, typer.Option("--draft/--no-draft", help="Mark the record as a draft.")
    ] = True,
) -> None:
    """Scaffold a new Markdown file with frontmatter."""
    config = _load(config_path, content_directory=content)
    try:
        name = resolve_collection(collection)
    except FolioError as exc:
        raise _fail(exc) from exc

    slug = slugify(title)
    if not slug:
        err_console.print("[bold red]Error:[/bold red] title has no usable characters")
        raise typer.Exit(code=1)

    path = CollectionLoader(config.content_dir).collection_dir(name) / f"{slug}.md"
    if path.exists():
        err_console.print(f"[bold red]Error:[/bold red] {path} already exists")
        raise typer.Exit(code=1)

    frontmatter: dict[str, object] = {
        "title": title,
        "description": "",
        "publishDate": date.today(),
        "tags": [],
        "draft": draft,
    }
    if "featured" in COLLECTION_SCHEMAS[name].model_fields:
        frontmatter["featured"] = False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_frontmatter(frontmatter, f"# {title}\n"), encoding="utf-8")
    console.print(f"[green]Created[/green] {path}")


if __name__ == "__main__":
    app()
