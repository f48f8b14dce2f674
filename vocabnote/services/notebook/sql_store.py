"""Relational notebook: one row per (chapter, word) in a shared table.

Marks are single ``INSERT ... ON CONFLICT DO UPDATE`` statements, so
concurrent processes never lose an increment.
"""

import hashlib
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from vocabnote.database import Base, create_session_factory, ensure_sqlite_directory
from vocabnote.exceptions import StorageReadError, StorageWriteError
from vocabnote.models import WordNoteRecord
from vocabnote.services.notebook.base import DEFAULT_CHAPTER, Clock, Notebook, WordNote
from vocabnote.services.notebook.ranking import BY_CREATE_TIME, Ranking

logger = logging.getLogger(__name__)

# Dialects whose insert() supports on_conflict_do_update
_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


def word_id(word: str) -> str:
    """Deterministic identifier of a word (sha1 hex digest)."""
    return hashlib.sha1(word.encode("utf-8")).hexdigest()  # noqa: S324


def _to_note(record: WordNoteRecord) -> WordNote:
    return WordNote(
        word=record.word,
        lookup_times=record.lookup_times,
        create_time=record.create_time,
        last_lookup_time=record.last_lookup_time,
    )


class SQLNotebook(Notebook):
    """Notebook stored in the ``word_notes`` table."""

    def __init__(
        self,
        engine: AsyncEngine,
        chapter: str = DEFAULT_CHAPTER,
        ranking: Ranking = BY_CREATE_TIME,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(chapter, ranking, clock)
        dialect = engine.dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise ValueError(f"unsupported database dialect for notebook: {dialect}")
        self.engine = engine
        self._insert = _UPSERT_INSERTS[dialect]
        self._session_factory = create_session_factory(engine)

    @property
    def _target(self) -> str:
        return f"word_notes[chapter={self.chapter}]"

    async def initialize(self) -> None:
        """Create the notes table if it does not exist."""
        ensure_sqlite_directory(self.engine)
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(
                    Base.metadata.create_all, tables=[WordNoteRecord.__table__]
                )
        except SQLAlchemyError as e:
            raise StorageWriteError("word_notes", f"cannot create table: {e}") from e

    async def _fetch(self, session: AsyncSession, word: str) -> WordNoteRecord | None:
        stmt = select(WordNoteRecord).where(
            WordNoteRecord.chapter == self.chapter,
            WordNoteRecord.word_id == word_id(word),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _bump(self, word: str, delta: int, now: int) -> WordNote:
        stmt = self._insert(WordNoteRecord).values(
            word_id=word_id(word),
            chapter=self.chapter,
            word=word,
            lookup_times=delta,
            create_time=now,
            last_lookup_time=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["word_id", "chapter"],
            set_={
                "lookup_times": WordNoteRecord.lookup_times + delta,
                "last_lookup_time": now,
            },
        )

        async with self._session_factory() as session:
            try:
                await session.execute(stmt)
                record = await self._fetch(session, word)
                if record is None:
                    raise StorageWriteError(self._target, f"'{word}' missing after upsert")
                note = _to_note(record)
                await session.commit()
            except SQLAlchemyError as e:
                raise StorageWriteError(self._target, str(e)) from e
        return note

    async def _delete(self, word: str) -> WordNote | None:
        async with self._session_factory() as session:
            try:
                record = await self._fetch(session, word)
                removed = _to_note(record) if record is not None else None
                result = await session.execute(
                    delete(WordNoteRecord).where(
                        WordNoteRecord.chapter == self.chapter,
                        WordNoteRecord.word_id == word_id(word),
                    )
                )
                await session.commit()
            except SQLAlchemyError as e:
                raise StorageWriteError(self._target, str(e)) from e

        if result.rowcount == 0:
            logger.debug(f"'{word}' not in chapter {self.chapter}, nothing to delete")
            return None
        return removed

    async def get(self, word: str) -> WordNote | None:
        async with self._session_factory() as session:
            try:
                record = await self._fetch(session, word)
            except SQLAlchemyError as e:
                raise StorageReadError(self._target, str(e)) from e
            return _to_note(record) if record is not None else None

    async def list_notes(self) -> list[WordNote]:
        order_by = [getattr(WordNoteRecord, field).desc() for field in self.ranking.fields]
        stmt = (
            select(WordNoteRecord)
            .where(WordNoteRecord.chapter == self.chapter)
            .order_by(*order_by, WordNoteRecord.id)
        )
        async with self._session_factory() as session:
            try:
                result = await session.execute(stmt)
            except SQLAlchemyError as e:
                raise StorageReadError(self._target, str(e)) from e
            return [_to_note(record) for record in result.scalars().all()]

    async def list_chapters(self) -> set[str]:
        async with self._session_factory() as session:
            try:
                result = await session.execute(select(WordNoteRecord.chapter).distinct())
            except SQLAlchemyError as e:
                raise StorageReadError("word_notes", str(e)) from e
            return set(result.scalars().all())
