"""Notebook commands."""

from datetime import datetime

import typer
from rich.table import Table

from vocabnote.cli.utils.async_runner import run_async
from vocabnote.cli.utils.console import console
from vocabnote.services.notebook import Action, WordNote, create_notebook

app = typer.Typer(
    name="notebook",
    help="Review and manage looked-up words",
    no_args_is_help=True,
)


def _format_time(epoch: int) -> str:
    return datetime.fromtimestamp(epoch).strftime("%Y-%m-%d %H:%M")


@app.command(name="list")
def list_notes(
    chapter: str = typer.Option("", "--chapter", "-c", help="Chapter to list"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum number of words to show"),
) -> None:
    """List the words of a chapter, most relevant first."""
    run_async(_list_notes(chapter, limit))


async def _list_notes(chapter: str, limit: int) -> None:
    """Async implementation of list command."""
    notebook = create_notebook(chapter=chapter or None)
    await notebook.initialize()
    notes = await notebook.list_notes()

    if not notes:
        console.print(f"[dim]Chapter '{notebook.chapter}' is empty.[/]")
        return

    table = Table(title=f"{notebook.chapter} ({len(notes)} words)")
    table.add_column("Word", style="word")
    table.add_column("Lookups", justify="right")
    table.add_column("Added")
    table.add_column("Last lookup")

    for note in notes[:limit] if limit > 0 else notes:
        table.add_row(
            note.word,
            str(note.lookup_times),
            _format_time(note.create_time),
            _format_time(note.last_lookup_time),
        )

    console.print(table)


@app.command(name="chapters")
def list_chapters() -> None:
    """List chapters that hold notes."""
    run_async(_list_chapters())


async def _list_chapters() -> None:
    """Async implementation of chapters command."""
    notebook = create_notebook()
    await notebook.initialize()
    chapters = await notebook.list_chapters()
    if not chapters:
        console.print("[dim]No chapters yet.[/]")
        return
    for name in sorted(chapters):
        console.print(name)


@app.command(name="mark")
def mark_word(
    word: str = typer.Argument(..., help="Word to mark"),
    action: str = typer.Option(
        Action.LEARNING.value,
        "--action",
        "-a",
        help="learning, learned or delete",
    ),
    chapter: str = typer.Option("", "--chapter", "-c", help="Chapter of the word"),
) -> None:
    """Mark a word as still learning, learned, or remove it."""
    run_async(_mark_word(word, action, chapter))


async def _mark_word(word: str, action: str, chapter: str) -> WordNote | None:
    """Async implementation of mark command."""
    notebook = create_notebook(chapter=chapter or None)
    await notebook.initialize()
    note = await notebook.mark(word, action)

    if action == Action.DELETE.value:
        if note is None:
            console.print(f"[dim]'{word}' was not in chapter '{notebook.chapter}'.[/]")
        else:
            console.print(f"[success]Removed '{word}' from '{notebook.chapter}'.[/]")
    elif note is not None:
        console.print(
            f"[success]{note.word}[/] looked up {note.lookup_times} time(s) "
            f"in '{notebook.chapter}'"
        )
    return note


@app.command(name="review")
def review(
    chapter: str = typer.Option("", "--chapter", "-c", help="Chapter to review"),
) -> None:
    """Show the next word to review."""
    run_async(_review(chapter))


async def _review(chapter: str) -> None:
    """Async implementation of review command."""
    notebook = create_notebook(chapter=chapter or None)
    await notebook.initialize()
    note = await notebook.review()
    if note is None:
        console.print(f"[dim]Chapter '{notebook.chapter}' is empty.[/]")
        return
    console.print(f"[word]{note.word}[/]")
