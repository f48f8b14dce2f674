"""Lookup server command."""

import typer

from vocabnote.cli.utils.console import console
from vocabnote.config import settings


def serve(
    port: int = typer.Option(settings.server_port, "--port", "-p", help="Port to listen on"),
    root: str = typer.Option(settings.server_root, "--root", "-r", help="Root path of the lookup route"),
    host: str = typer.Option(settings.server_host, "--host", help="Interface to bind"),
) -> None:
    """Serve plain-text lookups over HTTP."""
    from vocabnote.main import run

    console.print(f"[info]Server started at {host}:{port}/{root.strip('/')}[/]")
    run(host=host, port=port, root=root)
