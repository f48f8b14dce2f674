"""Dictionary providers, markup protocol and rendering."""

from vocabnote.services.dictionary.base import DictProvider, Endpoint, WordDefine, WordItem
from vocabnote.services.dictionary.registry import available_endpoints, get_provider
from vocabnote.services.dictionary.service import DictionaryService

__all__ = [
    "DictProvider",
    "DictionaryService",
    "Endpoint",
    "WordDefine",
    "WordItem",
    "available_endpoints",
    "get_provider",
]
