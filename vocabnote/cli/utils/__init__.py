"""CLI utility modules."""

from vocabnote.cli.utils.async_runner import run_async
from vocabnote.cli.utils.console import console, error_console

__all__ = ["run_async", "console", "error_console"]
