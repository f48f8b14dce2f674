"""Read-time ordering of word notes ("which word to review next")."""

from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vocabnote.services.notebook.base import WordNote


@dataclass(frozen=True)
class Ranking:
    """Sort notes descending by a sequence of WordNote fields.

    The SQL backend turns ``fields`` into ``ORDER BY ... DESC`` columns, so
    both backends return the same order.
    """

    name: str
    fields: tuple[str, ...]

    def sort(self, notes: Iterable["WordNote"]) -> list["WordNote"]:
        # sorted() is stable: ties keep their stored order
        return sorted(notes, key=attrgetter(*self.fields), reverse=True)


# Most recently first-learned word first
BY_CREATE_TIME = Ranking("create_time", ("create_time",))

# Most looked-up word first, most recent lookup breaking ties
BY_LOOKUP_TIMES = Ranking("lookup_times", ("lookup_times", "last_lookup_time"))

RANKINGS: dict[str, Ranking] = {r.name: r for r in (BY_CREATE_TIME, BY_LOOKUP_TIMES)}


def get_ranking(name: str) -> Ranking:
    """Return a ranking by name.

    Raises:
        ValueError: Unknown ranking name
    """
    try:
        return RANKINGS[name]
    except KeyError:
        raise ValueError(f"unknown ranking {name!r}, expected one of {sorted(RANKINGS)}") from None
