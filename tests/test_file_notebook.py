"""Tests for the file-backed notebook."""

import logging
from unittest.mock import patch

import pytest
import yaml

from vocabnote.exceptions import (
    InvalidActionError,
    InvalidWordError,
    StorageMarshalError,
    StorageReadError,
    StorageWriteError,
)
from vocabnote.services.notebook import Action, FileNotebook, WordNote
from vocabnote.services.notebook.file_store import atomic_write, load_notes, store_notes
from vocabnote.services.notebook.ranking import BY_LOOKUP_TIMES


class TestMark:
    """Tests for marking words."""

    @pytest.mark.asyncio
    async def test_learning_twice(self, file_notebook, clock):
        """Should count lookups and keep the first create_time."""
        clock.now = 1000
        first = await file_notebook.mark("hello", Action.LEARNING)
        clock.now = 2000
        second = await file_notebook.mark("hello", Action.LEARNING)

        assert first == WordNote("hello", 1, 1000, 1000)
        assert second == WordNote("hello", 2, 1000, 2000)
        assert await file_notebook.list_notes() == [second]

    @pytest.mark.asyncio
    async def test_learning_then_delete(self, file_notebook):
        """Should remove the note on delete."""
        await file_notebook.mark("hello", Action.LEARNING)
        removed = await file_notebook.mark("hello", Action.DELETE)

        assert removed is not None
        assert removed.word == "hello"
        assert all(n.word != "hello" for n in await file_notebook.list_notes())

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, file_notebook):
        """Should not fail when deleting an absent word."""
        await file_notebook.mark("other", Action.LEARNING)
        assert await file_notebook.mark("hello", Action.DELETE) is None
        assert [n.word for n in await file_notebook.list_notes()] == ["other"]

    @pytest.mark.asyncio
    async def test_delete_without_chapter_file(self, file_notebook):
        """Should treat a missing chapter as empty."""
        assert await file_notebook.mark("hello", Action.DELETE) is None
        assert not file_notebook.path.exists()

    @pytest.mark.asyncio
    async def test_learned_on_unseen_word(self, file_notebook, clock):
        """Should create a note with lookup_times -1."""
        note = await file_notebook.mark("hello", Action.LEARNED)
        assert note == WordNote("hello", -1, clock.now, clock.now)

    @pytest.mark.asyncio
    async def test_learned_decrements(self, file_notebook, clock):
        """Should decrement and refresh last_lookup_time."""
        await file_notebook.mark("hello", "learning")
        await file_notebook.mark("hello", "learning")
        clock.now = 5000
        note = await file_notebook.mark("hello", "learned")
        assert note == WordNote("hello", 1, 1000, 5000)

    @pytest.mark.asyncio
    async def test_invalid_action(self, file_notebook):
        """Should reject an unknown action without touching storage."""
        with pytest.raises(InvalidActionError):
            await file_notebook.mark("hello", "forget")
        assert not file_notebook.path.exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("word", ["", "   "])
    async def test_empty_word(self, file_notebook, word):
        """Should reject an empty or blank word without touching storage."""
        with pytest.raises(InvalidWordError):
            await file_notebook.mark(word, Action.LEARNING)
        assert not file_notebook.path.exists()

    @pytest.mark.asyncio
    async def test_words_are_case_sensitive(self, file_notebook):
        """Should keep differently cased words apart."""
        await file_notebook.mark("Hello", Action.LEARNING)
        await file_notebook.mark("hello", Action.LEARNING)
        assert len(await file_notebook.list_notes()) == 2

    @pytest.mark.asyncio
    async def test_chapters_are_separate(self, notebook_dir, clock):
        """Should keep notes of different chapters apart."""
        default = FileNotebook(notebook_dir, clock=clock)
        travel = FileNotebook(notebook_dir, chapter="travel", clock=clock)

        await default.mark("hello", Action.LEARNING)
        await travel.mark("hello", Action.LEARNING)
        await travel.mark("hello", Action.LEARNING)

        assert (await default.get("hello")).lookup_times == 1
        assert (await travel.get("hello")).lookup_times == 2


class TestListNotes:
    """Tests for reading chapters."""

    @pytest.mark.asyncio
    async def test_empty_chapter(self, file_notebook):
        """Should list nothing for a missing chapter file."""
        assert await file_notebook.list_notes() == []
        assert await file_notebook.review() is None

    @pytest.mark.asyncio
    async def test_newest_first(self, file_notebook, clock):
        """Should order by create_time descending."""
        for t, word in [(100, "a"), (300, "c"), (200, "b")]:
            clock.now = t
            await file_notebook.mark(word, Action.LEARNING)

        assert [n.word for n in await file_notebook.list_notes()] == ["c", "b", "a"]
        assert (await file_notebook.review()).word == "c"

    @pytest.mark.asyncio
    async def test_alternate_ranking(self, notebook_dir, clock):
        """Should order by the configured ranking."""
        notebook = FileNotebook(notebook_dir, ranking=BY_LOOKUP_TIMES, clock=clock)
        await notebook.mark("once", Action.LEARNING)
        clock.now = 2000
        await notebook.mark("twice", Action.LEARNING)
        await notebook.mark("twice", Action.LEARNING)
        clock.now = 3000
        await notebook.mark("newest", Action.LEARNING)

        assert [n.word for n in await notebook.list_notes()] == ["twice", "newest", "once"]

    @pytest.mark.asyncio
    async def test_stored_order_is_insertion_order(self, file_notebook, clock):
        """Should append new notes to the end of the file."""
        for t, word in [(300, "c"), (100, "a")]:
            clock.now = t
            await file_notebook.mark(word, Action.LEARNING)

        assert [n.word for n in load_notes(file_notebook.path)] == ["c", "a"]


class TestStorageFormat:
    """Tests for the chapter file format."""

    @pytest.mark.parametrize("count", [0, 1, 3, 50])
    def test_roundtrip(self, tmp_path, count):
        """Should read back exactly the notes written."""
        path = tmp_path / "default.yml"
        notes = [WordNote(f"word{i}", i - 1, 1000 + i, 2000 + i) for i in range(count)]

        store_notes(path, notes)

        assert load_notes(path) == notes

    def test_unicode_roundtrip(self, tmp_path):
        """Should keep non-ASCII words readable and intact."""
        path = tmp_path / "default.yml"
        store_notes(path, [WordNote("café au lait", 1, 1, 1), WordNote("単語", 2, 2, 2)])

        assert "単語" in path.read_text(encoding="utf-8")
        assert [n.word for n in load_notes(path)] == ["café au lait", "単語"]

    def test_human_readable(self, tmp_path):
        """Should write a YAML list of records."""
        path = tmp_path / "default.yml"
        store_notes(path, [WordNote("hello", 2, 1000, 2000)])

        assert yaml.safe_load(path.read_text()) == [
            {"word": "hello", "lookup_times": 2, "create_time": 1000, "last_lookup_time": 2000}
        ]

    def test_empty_file(self, tmp_path):
        """Should treat an empty file as an empty chapter."""
        path = tmp_path / "default.yml"
        path.write_text("")
        assert load_notes(path) == []

    def test_invalid_yaml(self, tmp_path):
        """Should raise StorageMarshalError for unparseable content."""
        path = tmp_path / "default.yml"
        path.write_text("- word: [unclosed\n")
        with pytest.raises(StorageMarshalError) as exc_info:
            load_notes(path)
        assert str(path) in str(exc_info.value)

    def test_not_a_list(self, tmp_path):
        """Should raise StorageMarshalError when the document is not a list."""
        path = tmp_path / "default.yml"
        path.write_text("word: hello\n")
        with pytest.raises(StorageMarshalError):
            load_notes(path)

    def test_bad_record(self, tmp_path):
        """Should raise StorageMarshalError for a record missing fields."""
        path = tmp_path / "default.yml"
        path.write_text("- word: hello\n  lookup_times: 1\n")
        with pytest.raises(StorageMarshalError):
            load_notes(path)

    def test_unreadable(self, tmp_path):
        """Should raise StorageReadError when the path cannot be read."""
        path = tmp_path / "default.yml"
        path.mkdir()
        with pytest.raises(StorageReadError):
            load_notes(path)

    @pytest.mark.asyncio
    async def test_corrupt_chapter_surfaces_on_mark(self, file_notebook):
        """Should not overwrite a corrupt chapter on mark."""
        file_notebook.path.parent.mkdir(parents=True)
        file_notebook.path.write_text("{not: a list}\n")

        with pytest.raises(StorageMarshalError):
            await file_notebook.mark("hello", Action.LEARNING)
        assert file_notebook.path.read_text() == "{not: a list}\n"


class TestAtomicWrite:
    """Tests for crash-safe writes."""

    def test_replaces_target(self, tmp_path):
        """Should replace the file and leave no temp files."""
        path = tmp_path / "default.yml"
        path.write_text("old")
        with atomic_write(path) as f:
            f.write("new")

        assert path.read_text() == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["default.yml"]

    def test_error_in_block_keeps_original(self, tmp_path):
        """Should leave the target untouched if writing fails."""
        path = tmp_path / "default.yml"
        path.write_text("old")

        with pytest.raises(RuntimeError):
            with atomic_write(path) as f:
                f.write("partial")
                raise RuntimeError("interrupted")

        assert path.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["default.yml"]

    @pytest.mark.asyncio
    async def test_interrupted_before_rename(self, file_notebook):
        """Should leave the chapter byte-for-byte unchanged if the rename never happens."""
        await file_notebook.mark("hello", Action.LEARNING)
        before = file_notebook.path.read_bytes()

        with patch(
            "vocabnote.services.notebook.file_store.os.replace",
            side_effect=KeyboardInterrupt,
        ):
            with pytest.raises(KeyboardInterrupt):
                await file_notebook.mark("world", Action.LEARNING)

        assert file_notebook.path.read_bytes() == before
        assert [n.word for n in await file_notebook.list_notes()] == ["hello"]
        assert [p.name for p in file_notebook.directory.iterdir()] == ["default.yml"]

    @pytest.mark.asyncio
    async def test_failed_rename_is_write_error(self, file_notebook):
        """Should surface an OS failure as StorageWriteError."""
        await file_notebook.mark("hello", Action.LEARNING)
        before = file_notebook.path.read_bytes()

        with patch(
            "vocabnote.services.notebook.file_store.os.replace",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(StorageWriteError):
                await file_notebook.mark("hello", Action.LEARNING)

        assert file_notebook.path.read_bytes() == before


class TestListChapters:
    """Tests for chapter discovery."""

    @pytest.mark.asyncio
    async def test_missing_directory(self, file_notebook):
        """Should return no chapters when the directory does not exist."""
        assert await file_notebook.list_chapters() == set()

    @pytest.mark.asyncio
    async def test_chapters_with_notes(self, notebook_dir, clock, caplog):
        """Should list non-empty chapter files and skip other files."""
        await FileNotebook(notebook_dir, clock=clock).mark("hello", Action.LEARNING)
        await FileNotebook(notebook_dir, chapter="travel", clock=clock).mark("hi", Action.LEARNING)
        (notebook_dir / "empty.yml").write_text("")
        (notebook_dir / "notes.txt").write_text("not a chapter")
        (notebook_dir / ".default.yml.abc.tmp").write_text("leftover")

        with caplog.at_level(logging.WARNING):
            chapters = await FileNotebook(notebook_dir).list_chapters()

        assert chapters == {"default", "travel"}
        assert "notes.txt" in caplog.text
        assert ".default.yml.abc.tmp" not in caplog.text

    @pytest.mark.asyncio
    async def test_chapter_emptied_by_delete(self, file_notebook):
        """Should drop a chapter once its last note is deleted."""
        await file_notebook.mark("hello", Action.LEARNING)
        await file_notebook.mark("hello", Action.DELETE)
        assert await file_notebook.list_chapters() == set()


class TestInitialize:
    """Tests for storage preparation."""

    @pytest.mark.asyncio
    async def test_creates_directory(self, file_notebook):
        """Should create the notebook directory."""
        await file_notebook.initialize()
        assert file_notebook.directory.is_dir()

    @pytest.mark.asyncio
    async def test_mark_creates_directory(self, file_notebook):
        """Should create the directory on first write."""
        await file_notebook.mark("hello", Action.LEARNING)
        assert file_notebook.path.is_file()
