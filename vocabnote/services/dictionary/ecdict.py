"""Offline ECDICT provider backed by a local stardict SQLite database."""

import logging
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vocabnote.database import create_engine
from vocabnote.exceptions import TransportError
from vocabnote.services.dictionary import markup
from vocabnote.services.dictionary.base import DictProvider, WordDefine, WordItem

logger = logging.getLogger(__name__)

_LOOKUP_SQL = text(
    "SELECT word, phonetic, definition, translation FROM stardict "
    "WHERE word = :word COLLATE NOCASE ORDER BY word = :word DESC LIMIT 1"
)


def _split_lines(value: str | None) -> list[str]:
    """Split an ECDICT field into lines; CSV exports escape newlines as ``\\n``."""
    if not value:
        return []
    value = value.replace("\\n", "\n")
    return [line.strip() for line in value.split("\n") if line.strip()]


class ECDictProvider(DictProvider):
    """Look words up in an ECDICT ``stardict.db`` file."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)

    @property
    def name(self) -> str:
        return "ecdict"

    async def search(self, word: str) -> WordItem:
        # Connecting to a missing file would silently create an empty database
        if not self.db_path.is_file():
            raise TransportError(self.name, word, f"dictionary file {self.db_path} not found")

        engine = create_engine(f"sqlite+aiosqlite:///{self.db_path}")
        try:
            async with engine.connect() as conn:
                result = await conn.execute(_LOOKUP_SQL, {"word": word})
                row = result.first()
        except SQLAlchemyError as e:
            raise TransportError(self.name, word, f"query failed: {e}") from e
        finally:
            await engine.dispose()

        if row is None:
            return WordItem.not_found(word)

        lines = _split_lines(row.translation)
        lines.extend(markup.quote(line) for line in _split_lines(row.definition))
        phonetics = (f"/{row.phonetic}/",) if row.phonetic else ()
        return WordItem(
            word=word,
            defines=(WordDefine(phonetics=phonetics, definition="\n".join(lines)),),
        )
