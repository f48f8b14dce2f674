"""Base classes and dataclasses for dictionary providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Endpoint(str, Enum):
    """Identifiers of the available dictionary providers."""

    YOUDAO = "youdao"
    ETYMONLINE = "etymonline"
    ECDICT = "ecdict"
    CHATGPT = "chatgpt"
    MWEBSTER = "mwebster"


@dataclass(frozen=True)
class WordDefine:
    """One sense or entry of a word."""

    phonetics: tuple[str, ...] = ()
    definition: str = ""  # may carry markup line prefixes

    def __post_init__(self) -> None:
        # Accept lists from parsers and JSON, store an immutable tuple
        object.__setattr__(self, "phonetics", tuple(self.phonetics))


@dataclass(frozen=True)
class WordItem:
    """Normalized result of one dictionary lookup.

    An empty ``defines`` tuple means the provider does not know the word.
    """

    word: str
    defines: tuple[WordDefine, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "word", self.word.strip())
        object.__setattr__(self, "defines", tuple(self.defines))

    @property
    def found(self) -> bool:
        """Check if the provider returned any definition."""
        return len(self.defines) > 0

    @classmethod
    def not_found(cls, word: str) -> "WordItem":
        """Return the sentinel item for an unknown word."""
        return cls(word=word)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "word": self.word,
            "defines": [
                {"phonetics": list(d.phonetics), "definition": d.definition}
                for d in self.defines
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WordItem":
        """Build an item from the output of ``to_dict``."""
        return cls(
            word=data["word"],
            defines=tuple(
                WordDefine(
                    phonetics=tuple(d.get("phonetics", [])),
                    definition=d.get("definition", ""),
                )
                for d in data.get("defines", [])
            ),
        )


class DictProvider(ABC):
    """Abstract base class for dictionary providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the endpoint identifier of this provider."""
        ...  # pragma: no cover

    @abstractmethod
    async def search(self, word: str) -> WordItem:
        """
        Look up a word.

        Args:
            word: Display text to look up, already trimmed by the caller.
                Providers treat it as opaque and do not tokenize it.

        Returns:
            WordItem with the provider's definitions in presentation order,
            or an item with no defines if the word is unknown.

        Raises:
            TransportError: Network, authentication or response-shape failure.
        """
        ...  # pragma: no cover
