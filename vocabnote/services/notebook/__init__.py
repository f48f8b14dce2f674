"""Word notebook with interchangeable file and relational backends."""

from vocabnote.services.notebook.base import (
    DEFAULT_CHAPTER,
    Action,
    Notebook,
    WordNote,
    validate_chapter,
)
from vocabnote.services.notebook.factory import create_notebook
from vocabnote.services.notebook.file_store import FileNotebook
from vocabnote.services.notebook.ranking import BY_CREATE_TIME, BY_LOOKUP_TIMES, Ranking, get_ranking
from vocabnote.services.notebook.sql_store import SQLNotebook

__all__ = [
    "DEFAULT_CHAPTER",
    "Action",
    "BY_CREATE_TIME",
    "BY_LOOKUP_TIMES",
    "FileNotebook",
    "Notebook",
    "Ranking",
    "SQLNotebook",
    "WordNote",
    "create_notebook",
    "get_ranking",
    "validate_chapter",
]
