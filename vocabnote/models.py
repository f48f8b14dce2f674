"""SQLAlchemy ORM models."""

from sqlalchemy import BigInteger, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vocabnote.database import Base


class WordNoteRecord(Base):
    """One word note of one chapter (relational notebook backend)."""

    __tablename__ = "word_notes"
    __table_args__ = (
        UniqueConstraint("word_id", "chapter", name="uq_word_note_chapter"),
        Index("ix_word_notes_chapter", "chapter"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    word_id: Mapped[str] = mapped_column(String(40))  # sha1 hex of the word
    chapter: Mapped[str] = mapped_column(String(255))
    word: Mapped[str] = mapped_column(Text)
    lookup_times: Mapped[int] = mapped_column(Integer, default=0)
    create_time: Mapped[int] = mapped_column(BigInteger)  # epoch seconds
    last_lookup_time: Mapped[int] = mapped_column(BigInteger)  # epoch seconds
