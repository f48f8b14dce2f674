"""Services for dictionary lookups and the word notebook."""

from vocabnote.services.dictionary import DictionaryService, get_provider
from vocabnote.services.notebook import create_notebook

__all__ = ["DictionaryService", "get_provider", "create_notebook"]
