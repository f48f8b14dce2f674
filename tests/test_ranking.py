"""Tests for note ranking strategies."""

import pytest

from vocabnote.services.notebook.base import WordNote
from vocabnote.services.notebook.ranking import (
    BY_CREATE_TIME,
    BY_LOOKUP_TIMES,
    get_ranking,
)


@pytest.fixture
def notes() -> list[WordNote]:
    return [
        WordNote("old-frequent", 5, 100, 500),
        WordNote("new-rare", 1, 300, 300),
        WordNote("mid", 5, 200, 900),
    ]


class TestByCreateTime:
    """Tests for the create_time ranking."""

    def test_newest_first(self, notes):
        """Should order by create_time descending."""
        assert [n.word for n in BY_CREATE_TIME.sort(notes)] == ["new-rare", "mid", "old-frequent"]

    def test_ties_keep_stored_order(self):
        """Should keep stored order for equal create_time."""
        notes = [WordNote("a", 1, 100, 100), WordNote("b", 9, 100, 100)]
        assert [n.word for n in BY_CREATE_TIME.sort(notes)] == ["a", "b"]

    def test_empty(self):
        """Should sort an empty sequence."""
        assert BY_CREATE_TIME.sort([]) == []


class TestByLookupTimes:
    """Tests for the lookup_times ranking."""

    def test_most_looked_up_first(self, notes):
        """Should order by lookup_times, then last_lookup_time, descending."""
        assert [n.word for n in BY_LOOKUP_TIMES.sort(notes)] == ["mid", "old-frequent", "new-rare"]


class TestGetRanking:
    """Tests for ranking lookup by name."""

    def test_known_names(self):
        """Should return rankings by name."""
        assert get_ranking("create_time") is BY_CREATE_TIME
        assert get_ranking("lookup_times") is BY_LOOKUP_TIMES

    def test_unknown_name(self):
        """Should raise ValueError for an unknown name."""
        with pytest.raises(ValueError, match="unknown ranking"):
            get_ranking("alphabetical")
