"""Notebook contract shared by the file and relational backends."""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from vocabnote.exceptions import InvalidActionError, InvalidChapterError, InvalidWordError
from vocabnote.services.notebook.ranking import BY_CREATE_TIME, Ranking

DEFAULT_CHAPTER = "default"

Clock = Callable[[], int]


class Action(str, Enum):
    """Ways a word can be marked in the notebook."""

    LEARNING = "learning"
    LEARNED = "learned"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Any) -> "Action":
        """Convert a string (or Action) to an Action.

        Raises:
            InvalidActionError: The value is not a known action
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidActionError(value) from None


@dataclass(frozen=True)
class WordNote:
    """Review record of one word in one chapter."""

    word: str
    lookup_times: int  # signed: "learned" marks may push it below zero
    create_time: int  # epoch seconds
    last_lookup_time: int  # epoch seconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "lookup_times": self.lookup_times,
            "create_time": self.create_time,
            "last_lookup_time": self.last_lookup_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WordNote":
        """Build a note from a stored record.

        Raises:
            KeyError: A field is missing
            TypeError, ValueError: A field has the wrong type
        """
        word = data["word"]
        if not isinstance(word, str):
            raise TypeError(f"word must be a string, got {type(word).__name__}")
        return cls(
            word=word,
            lookup_times=int(data["lookup_times"]),
            create_time=int(data["create_time"]),
            last_lookup_time=int(data["last_lookup_time"]),
        )


def validate_chapter(chapter: str) -> str:
    """Check that a chapter name is usable as a partition (and file) name."""
    if (
        not chapter
        or chapter != chapter.strip()
        or chapter.startswith(".")
        or any(sep in chapter for sep in ("/", "\\", "\0"))
    ):
        raise InvalidChapterError(chapter)
    return chapter


def _now() -> int:
    return int(time.time())


class Notebook(ABC):
    """A chapter of word notes.

    Subclasses store the notes; this class turns mark actions into
    counter deltas and timestamps.
    """

    def __init__(
        self,
        chapter: str = DEFAULT_CHAPTER,
        ranking: Ranking = BY_CREATE_TIME,
        clock: Clock | None = None,
    ) -> None:
        self.chapter = validate_chapter(chapter)
        self.ranking = ranking
        self._clock = clock or _now

    async def initialize(self) -> None:
        """Prepare the underlying storage (no-op by default)."""

    async def mark(self, word: str, action: Action | str) -> WordNote | None:
        """
        Record a lookup, a "learned" demotion or a deletion of a word.

        Args:
            word: Word identity, case-sensitive
            action: learning, learned or delete

        Returns:
            The resulting note, or for delete the removed note (None if there
            was nothing to delete)

        Raises:
            InvalidActionError: The action is not recognized
            InvalidWordError: The word is empty or blank
            StorageError: The backend could not read or write the chapter
        """
        action = Action.parse(action)
        if not word.strip():
            raise InvalidWordError(word)
        if action is Action.DELETE:
            return await self._delete(word)
        delta = 1 if action is Action.LEARNING else -1
        return await self._bump(word, delta, self._clock())

    async def review(self) -> WordNote | None:
        """Return the top-ranked note of the chapter, or None if it is empty."""
        notes = await self.list_notes()
        return notes[0] if notes else None

    @abstractmethod
    async def _bump(self, word: str, delta: int, now: int) -> WordNote:
        """Create the note with ``lookup_times=delta`` or add ``delta`` to it."""
        ...  # pragma: no cover

    @abstractmethod
    async def _delete(self, word: str) -> WordNote | None:
        """Remove the note if present and return it."""
        ...  # pragma: no cover

    @abstractmethod
    async def get(self, word: str) -> WordNote | None:
        """Return the note for a word, or None."""
        ...  # pragma: no cover

    @abstractmethod
    async def list_notes(self) -> list[WordNote]:
        """Return all notes of the chapter, ordered by the ranking."""
        ...  # pragma: no cover

    @abstractmethod
    async def list_chapters(self) -> set[str]:
        """Return the names of all chapters holding notes."""
        ...  # pragma: no cover
