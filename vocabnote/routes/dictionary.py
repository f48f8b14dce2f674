"""Plain-text dictionary lookup route."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vocabnote.config import settings
from vocabnote.database import get_session
from vocabnote.exceptions import InvalidEndpointError, TransportError
from vocabnote.services.dictionary import DictionaryService, get_provider
from vocabnote.services.dictionary.cache import CacheManager
from vocabnote.services.dictionary.render import render_raw

logger = logging.getLogger(__name__)

# Mounted under the configurable server root (default "/dict")
router = APIRouter(tags=["dictionary"])


@router.get("", response_class=PlainTextResponse)
async def lookup_word(
    word: str = Query("", description="Word or phrase to look up"),
    endpoint: str = Query("", description="Dictionary endpoint"),
    session: AsyncSession = Depends(get_session),
) -> PlainTextResponse:
    """Look up a word and return the definition as plain text."""
    word = word.strip()
    if not word:
        raise HTTPException(status_code=400, detail="missing word")

    try:
        provider = get_provider(endpoint or settings.dict_endpoint)
    except InvalidEndpointError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None

    service = DictionaryService(
        provider,
        cache_manager=CacheManager(settings.cache_ttl_days, settings.cache_not_found_ttl_days),
        use_cache=settings.cache_enabled,
    )
    try:
        item = await service.lookup(word, session)
        await session.commit()
    except TransportError as e:
        logger.warning(f"Lookup failed: {e}")
        raise HTTPException(status_code=502, detail=str(e)) from None

    return PlainTextResponse(render_raw(item))
