"""Build the configured notebook backend."""

from vocabnote.config import Settings, settings
from vocabnote.database import create_engine
from vocabnote.services.notebook.base import Clock, Notebook
from vocabnote.services.notebook.file_store import FileNotebook
from vocabnote.services.notebook.ranking import get_ranking
from vocabnote.services.notebook.sql_store import SQLNotebook


def create_notebook(
    config: Settings | None = None,
    chapter: str | None = None,
    clock: Clock | None = None,
) -> Notebook:
    """
    Create the notebook backend selected by configuration.

    Args:
        config: Settings to read (defaults to global settings)
        chapter: Chapter to open (defaults to the configured chapter)
        clock: Optional time source returning epoch seconds

    Raises:
        ValueError: Unknown backend or ranking
        InvalidChapterError: The chapter name is not usable
    """
    config = config or settings
    ranking = get_ranking(config.ranking)
    chapter = chapter or config.chapter

    if config.notebook_backend == "file":
        return FileNotebook(config.notebook_dir, chapter=chapter, ranking=ranking, clock=clock)
    if config.notebook_backend == "sql":
        return SQLNotebook(
            create_engine(config.resolved_database_url),
            chapter=chapter,
            ranking=ranking,
            clock=clock,
        )
    raise ValueError(f"unknown notebook backend: {config.notebook_backend!r}")
