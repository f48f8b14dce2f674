"""Main CLI application entry point."""

import typer

from vocabnote.cli.commands import lookup, notebook, server
from vocabnote.logging_config import setup_logging

app = typer.Typer(
    name="vocabnote",
    help="Look up words in online and offline dictionaries and keep a notebook of them",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def startup() -> None:
    """Initialize application on startup."""
    setup_logging()


# Register lookup command
app.command(name="lookup", help="Look up a word and record it in the notebook")(lookup.lookup)

# Register notebook subcommands
app.add_typer(notebook.app, name="notebook")

# Register server command
app.command(name="serve", help="Serve plain-text lookups over HTTP")(server.serve)


if __name__ == "__main__":
    app()
