"""File-backed notebook: one YAML file per chapter.

Every mark reads the whole chapter, patches one record and rewrites the
whole file. Writes go to a sibling temp file that is renamed over the chapter
file, so readers see either the old or the new file, never a partial one.
There is no locking: two processes marking the same chapter at once can
lose one update (last rename wins). Use the SQL backend when that matters.
"""

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import IO

import yaml

from vocabnote.exceptions import StorageMarshalError, StorageReadError, StorageWriteError
from vocabnote.services.notebook.base import DEFAULT_CHAPTER, Clock, Notebook, WordNote
from vocabnote.services.notebook.ranking import BY_CREATE_TIME, Ranking

logger = logging.getLogger(__name__)

CHAPTER_SUFFIX = ".yml"


@contextmanager
def atomic_write(path: Path) -> Iterator[IO[str]]:
    """
    Open a temp file next to ``path`` and rename it over ``path`` on success.

    If the block raises, the temp file is removed and ``path`` is untouched.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def load_notes(path: Path) -> list[WordNote]:
    """
    Read all notes of a chapter file in stored order.

    A missing or empty file holds no notes.

    Raises:
        StorageReadError: The file exists but cannot be read
        StorageMarshalError: The file is not a valid list of notes
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as e:
        raise StorageReadError(str(path), str(e)) from e

    if not content.strip():
        return []

    try:
        records = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise StorageMarshalError(str(path), f"invalid YAML: {e}") from e

    if records is None:
        return []
    if not isinstance(records, list):
        raise StorageMarshalError(str(path), "expected a list of notes")

    try:
        return [WordNote.from_dict(record) for record in records]
    except (KeyError, TypeError, ValueError) as e:
        raise StorageMarshalError(str(path), f"invalid note record: {e!r}") from e


def store_notes(path: Path, notes: list[WordNote]) -> None:
    """
    Replace a chapter file with the given notes.

    Raises:
        StorageMarshalError: The notes cannot be serialized
        StorageWriteError: The file cannot be written; the old file is kept
    """
    try:
        content = yaml.safe_dump(
            [note.to_dict() for note in notes],
            allow_unicode=True,
            sort_keys=False,
        )
    except yaml.YAMLError as e:
        raise StorageMarshalError(str(path), str(e)) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with atomic_write(path) as f:
            f.write(content)
    except OSError as e:
        raise StorageWriteError(str(path), str(e)) from e


class FileNotebook(Notebook):
    """Notebook keeping each chapter in ``<directory>/<chapter>.yml``."""

    def __init__(
        self,
        directory: Path,
        chapter: str = DEFAULT_CHAPTER,
        ranking: Ranking = BY_CREATE_TIME,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(chapter, ranking, clock)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        """Path of the current chapter file."""
        return self.directory / f"{self.chapter}{CHAPTER_SUFFIX}"

    def read_notes(self) -> list[WordNote]:
        """Load the chapter and sort it by the ranking."""
        return self.ranking.sort(load_notes(self.path))

    def write_notes(self, notes: list[WordNote]) -> None:
        """Atomically replace the chapter with ``notes``."""
        store_notes(self.path, notes)

    async def initialize(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(str(self.directory), str(e)) from e

    async def _bump(self, word: str, delta: int, now: int) -> WordNote:
        notes = load_notes(self.path)
        for i, existing in enumerate(notes):
            if existing.word == word:
                note = replace(
                    existing,
                    lookup_times=existing.lookup_times + delta,
                    last_lookup_time=now,
                )
                notes[i] = note
                break
        else:
            note = WordNote(word=word, lookup_times=delta, create_time=now, last_lookup_time=now)
            notes.append(note)

        self.write_notes(notes)
        return note

    async def _delete(self, word: str) -> WordNote | None:
        notes = load_notes(self.path)
        removed = next((note for note in notes if note.word == word), None)
        if removed is None:
            logger.debug(f"'{word}' not in chapter {self.chapter}, nothing to delete")
            return None

        self.write_notes([note for note in notes if note.word != word])
        return removed

    async def get(self, word: str) -> WordNote | None:
        return next((note for note in load_notes(self.path) if note.word == word), None)

    async def list_notes(self) -> list[WordNote]:
        return self.read_notes()

    async def list_chapters(self) -> set[str]:
        """Return chapters with at least one note.

        Files with another suffix are skipped with a warning; hidden files
        (including leftover temp files) are skipped silently.
        """
        if not self.directory.is_dir():
            return set()

        chapters: set[str] = set()
        for entry in sorted(self.directory.iterdir()):
            if entry.name.startswith(".") or not entry.is_file():
                continue
            if entry.suffix != CHAPTER_SUFFIX:
                logger.warning(f"Skipping {entry.name}: not a chapter file ({CHAPTER_SUFFIX})")
                continue
            if load_notes(entry):
                chapters.add(entry.stem)
        return chapters
