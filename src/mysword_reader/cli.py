"""Command-line interface for MySword Reader."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mysword_reader import __version__
from mysword_reader.library.registry import Module, ModuleLibrary

console = Console()


def open_library() -> ModuleLibrary:
    """Library backed by the configured module directory, with stored modules re-opened."""
    from mysword_reader.library.store import DirectoryModuleStore

    library = ModuleLibrary(store=DirectoryModuleStore())
    library.restore()
    return library


def find_module(library: ModuleLibrary, key: str) -> Module:
    module = library.find(key)
    if module is None:
        raise click.ClickException(f"No module named {key!r} (see 'mysword modules')")
    return module


def resolve_book(name: str) -> int:
    from mysword_reader.books import resolve_book_id

    book_id = resolve_book_id(name)
    if book_id is None:
        raise click.ClickException(f"Unknown book: {name}")
    return book_id


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default from MYSWORD_LOG_LEVEL)")
def main(log_level: str | None) -> None:
    """MySword Reader - read MySword Bible and commentary modules."""
    from mysword_reader.config import setup_logging

    setup_logging(log_level)


@main.command()
def status() -> None:
    """Show engine and module directory status."""
    from mysword_reader.config import get_settings
    from mysword_reader.ingest.engine import init_engine

    console.print("[bold]MySword Reader Status[/bold]\n")

    engine = init_engine()
    console.print(f"SQLite version: {engine.sqlite_version}")

    settings = get_settings()
    console.print(f"Modules directory: {settings.modules_dir}")

    library = open_library()
    try:
        console.print(f"Modules: {len(library):,}")
    finally:
        library.close()


@main.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def import_module(path: str) -> None:
    """Import a MySword module file."""
    from mysword_reader.errors import LoadError

    library = open_library()
    try:
        with console.status("Importing module..."):
            module = library.import_file(Path(path))
        console.print(f"[green]✓[/green] Imported {escape(module.name)} ({module.type.label})")
        console.print(f"[dim]id: {escape(module.id)}[/dim]")
    except LoadError as e:
        console.print(f"[red]✗[/red] Could not import module: {escape(str(e))}")
        raise SystemExit(1)
    finally:
        library.close()


@main.command()
def modules() -> None:
    """List imported modules."""
    library = open_library()
    try:
        if not len(library):
            console.print("[yellow]No modules imported yet[/yellow]")
            return

        table = Table(title="Modules")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Id", style="dim")

        for module in library:
            table.add_row(escape(module.name), module.type.label, escape(module.id))

        console.print(table)
    finally:
        library.close()


@main.command()
@click.argument("module_id")
def remove(module_id: str) -> None:
    """Remove an imported module by id or name."""
    library = open_library()
    try:
        module = find_module(library, module_id)
        library.remove(module.id)
        console.print(f"[green]✓[/green] Removed {escape(module.name)}")
    finally:
        library.close()


@main.command()
@click.argument("module")
@click.argument("book")
@click.argument("chapter", type=int)
def read(module: str, book: str, chapter: int) -> None:
    """Print a chapter from a Bible module."""
    from mysword_reader.books import book_name
    from mysword_reader.query.verses import get_chapter_count, get_verses

    library = open_library()
    try:
        bible = find_module(library, module)
        book_id = resolve_book(book)

        verses = get_verses(bible.handle, book_id, chapter)
        if not verses:
            chapters = get_chapter_count(bible.handle, book_id)
            console.print(
                f"[yellow]No verses found ({escape(bible.name)} has {chapters} chapters in this book)[/yellow]"
            )
            return

        console.print(f"[bold]{book_name(book_id)} {chapter}[/bold] [dim]{escape(bible.name)}[/dim]\n")
        for verse in verses:
            if verse.title:
                console.print(f"\n[bold]{escape(verse.title)}[/bold]")
            console.print(f"[dim]{verse.number}[/dim] {escape(verse.text)}", highlight=False)
    finally:
        library.close()


@main.command()
@click.argument("module")
@click.argument("book")
@click.argument("chapter", type=int)
@click.argument("verse", type=int)
def comment(module: str, book: str, chapter: int, verse: int) -> None:
    """Print the commentary or cross-reference entry for a verse."""
    from mysword_reader.books import book_name
    from mysword_reader.config import get_settings
    from mysword_reader.query.annotations import get_annotation_text

    library = open_library()
    try:
        source = find_module(library, module)
        book_id = resolve_book(book)

        text = get_annotation_text(source.handle, book_id, chapter, verse)

        console.print(f"[bold]{book_name(book_id)} {chapter}:{verse}[/bold] [dim]{escape(source.name)}[/dim]\n")
        if text:
            console.print(escape(text), highlight=False)
        else:
            console.print(f"[dim]{get_settings().no_annotation_message}[/dim]")
    finally:
        library.close()


if __name__ == "__main__":
    main()
