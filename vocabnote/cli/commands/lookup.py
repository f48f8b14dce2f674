"""Dictionary lookup command."""

import typer

from vocabnote.cli.utils.async_runner import run_async
from vocabnote.cli.utils.console import console, error_console
from vocabnote.config import settings
from vocabnote.database import async_session, init_db
from vocabnote.services.dictionary import (
    DictionaryService,
    WordItem,
    available_endpoints,
    get_provider,
)
from vocabnote.services.dictionary.cache import CacheManager
from vocabnote.services.dictionary.render import render_raw, render_rich
from vocabnote.services.notebook import Action, create_notebook


def lookup(
    words: list[str] = typer.Argument(..., help="Word or phrase to look up"),
    endpoint: str = typer.Option(
        "",
        "--endpoint",
        "-e",
        help=f"Dictionary to use ({', '.join(available_endpoints())})",
    ),
    chapter: str = typer.Option("", "--chapter", "-c", help="Notebook chapter to record into"),
    mark: bool = typer.Option(True, "--mark/--no-mark", help="Record the word in the notebook"),
    raw: bool = typer.Option(False, "--raw", help="Print plain text without colors"),
) -> None:
    """Look up a word and record it in the notebook."""
    word = " ".join(words).strip()
    if not word:
        error_console.print("[error]Nothing to look up[/]")
        raise typer.Exit(1)

    item = run_async(_lookup(word, endpoint or settings.dict_endpoint, chapter, mark))

    if raw:
        typer.echo(render_raw(item), nl=False)
    else:
        console.print(render_rich(item), end="")
    if not item.found:
        console.print(f"[warning]Word not found: {item.word}[/]")


async def _lookup(word: str, endpoint: str, chapter: str, mark: bool) -> WordItem:
    """Async implementation of lookup command."""
    service = DictionaryService(
        get_provider(endpoint),
        cache_manager=CacheManager(settings.cache_ttl_days, settings.cache_not_found_ttl_days),
        use_cache=settings.cache_enabled,
    )

    if settings.cache_enabled:
        await init_db()
        async with async_session() as session:
            item = await service.lookup(word, session)
            await session.commit()
    else:
        item = await service.lookup(word)

    if mark and item.found:
        notebook = create_notebook(chapter=chapter or None)
        await notebook.initialize()
        await notebook.mark(item.word, Action.LEARNING)

    return item
