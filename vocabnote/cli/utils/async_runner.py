"""Async runner utilities for CLI commands."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer
from rich.markup import escape

from vocabnote.cli.utils.console import error_console
from vocabnote.exceptions import VocabNoteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine from synchronous CLI code.

    Library errors are printed to stderr and end the command with exit code 1.
    """
    try:
        return asyncio.run(coro)
    except VocabNoteError as e:
        logger.debug("Command failed", exc_info=True)
        error_console.print(f"[error]{escape(str(e))}[/]")
        raise typer.Exit(1) from None
