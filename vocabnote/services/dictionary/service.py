"""Dictionary service facade adding caching around one provider."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vocabnote.services.dictionary.base import DictProvider, WordItem
from vocabnote.services.dictionary.cache import CacheManager

logger = logging.getLogger(__name__)


class DictionaryService:
    """
    Facade for dictionary lookups with optional caching.

    "Not found" results are cached like any other result; provider errors
    propagate to the caller and are never cached.
    """

    def __init__(
        self,
        provider: DictProvider,
        cache_manager: CacheManager | None = None,
        use_cache: bool = True,
    ) -> None:
        """
        Initialize the dictionary service.

        Args:
            provider: Provider selected for this run
            cache_manager: Cache manager instance. Defaults to CacheManager()
            use_cache: Whether to use caching. Set False for testing.
        """
        self.provider = provider
        self.cache_manager = cache_manager or CacheManager()
        self.use_cache = use_cache

    async def lookup(self, word: str, session: AsyncSession | None = None) -> WordItem:
        """
        Look up a word, consulting the cache first when a session is given.

        Args:
            word: Display text to look up; surrounding whitespace is trimmed
            session: Database session for caching (optional)

        Returns:
            WordItem, with no defines if the word is unknown

        Raises:
            ValueError: The word is empty
            TransportError: The provider failed
        """
        word = word.strip()
        if not word:
            raise ValueError("word must not be empty")

        endpoint = self.provider.name
        if self.use_cache and session:
            cached = await self.cache_manager.get(session, word, endpoint)
            if cached is not None:
                logger.debug(f"Cache hit for '{word}' from {endpoint}")
                return cached

        item = await self.provider.search(word)

        if self.use_cache and session:
            await self.cache_manager.set(session, word, endpoint, item)

        return item
