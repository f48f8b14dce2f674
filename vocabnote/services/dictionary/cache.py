"""Dictionary lookup cache using SQLite."""

import json
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import Text, UniqueConstraint, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from vocabnote.database import Base
from vocabnote.services.dictionary.base import WordItem

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    """Return current UTC time as a naive datetime (SQLite drops tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class LookupCache(Base):
    """Cached provider results, including "not found" results."""

    __tablename__ = "lookup_cache"
    __table_args__ = (UniqueConstraint("word", "endpoint", name="uq_cache_lookup"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    word: Mapped[str] = mapped_column(Text, index=True)
    endpoint: Mapped[str] = mapped_column(Text)
    data: Mapped[str] = mapped_column(Text)  # WordItem as JSON
    created_at: Mapped[datetime] = mapped_column(default=_utc_now)
    expires_at: Mapped[datetime] = mapped_column(index=True)


def _serialize_item(item: WordItem) -> str:
    """Serialize a WordItem to JSON."""
    return json.dumps(item.to_dict(), ensure_ascii=False)


def _deserialize_item(data: str) -> WordItem:
    """Deserialize JSON to a WordItem."""
    return WordItem.from_dict(json.loads(data))


class CacheManager:
    """Manages lookup cache operations."""

    DEFAULT_TTL_DAYS = 30
    NOT_FOUND_TTL_DAYS = 7

    def __init__(
        self,
        ttl_days: int = DEFAULT_TTL_DAYS,
        not_found_ttl_days: int = NOT_FOUND_TTL_DAYS,
    ) -> None:
        self.ttl_days = ttl_days
        self.not_found_ttl_days = not_found_ttl_days

    async def get(self, session: AsyncSession, word: str, endpoint: str) -> WordItem | None:
        """
        Get a cached item.

        Returns:
            The cached WordItem (possibly a "not found" item), or None on a miss
        """
        stmt = select(LookupCache).where(
            LookupCache.word == word,
            LookupCache.endpoint == endpoint,
            LookupCache.expires_at > _utc_now(),
        )
        result = await session.execute(stmt)
        cached = result.scalar_one_or_none()
        if cached is None:
            return None
        return _deserialize_item(cached.data)

    async def set(self, session: AsyncSession, word: str, endpoint: str, item: WordItem) -> None:
        """Cache a lookup result, replacing any previous entry."""
        now = _utc_now()
        ttl = self.ttl_days if item.found else self.not_found_ttl_days
        expires_at = now + timedelta(days=ttl)

        stmt = select(LookupCache).where(
            LookupCache.word == word,
            LookupCache.endpoint == endpoint,
        )
        result = await session.execute(stmt)
        existing = result.scalar_one_or_none()

        if existing:
            existing.data = _serialize_item(item)
            existing.created_at = now
            existing.expires_at = expires_at
        else:
            session.add(
                LookupCache(
                    word=word,
                    endpoint=endpoint,
                    data=_serialize_item(item),
                    created_at=now,
                    expires_at=expires_at,
                )
            )

        await session.flush()

    async def cleanup_expired(self, session: AsyncSession) -> int:
        """
        Remove expired cache entries.

        Returns the number of entries deleted.
        """
        now = _utc_now()

        count_stmt = (
            select(func.count()).select_from(LookupCache).where(LookupCache.expires_at <= now)
        )
        count_result = await session.execute(count_stmt)
        count = count_result.scalar() or 0

        await session.execute(delete(LookupCache).where(LookupCache.expires_at <= now))
        await session.flush()

        return int(count)
