"""Terminal and plain-text renderings of a WordItem.

Both renderings come from ``iter_render_lines`` so they never drift apart.
Style names resolve against the console theme in ``vocabnote.cli.utils.console``.
"""

from collections.abc import Iterator

from rich.text import Text

from vocabnote.services.dictionary.base import WordItem
from vocabnote.services.dictionary.markup import LineStyle, decode

WORD_STYLE = "word"
PHONETIC_STYLE = "phonetic"

_LINE_STYLES = {
    LineStyle.PLAIN: "",
    LineStyle.QUOTE: "quote",
    LineStyle.HIGHLIGHT: "highlight",
}


def iter_render_lines(item: WordItem) -> Iterator[tuple[str, str]]:
    """Yield ``(style, text)`` pairs for every displayed line of an item."""
    yield WORD_STYLE, item.word
    for define in item.defines:
        if define.phonetics:
            yield PHONETIC_STYLE, " ".join(define.phonetics)
        for line in decode(define.definition):
            yield _LINE_STYLES[line.style], line.text


def render_rich(item: WordItem) -> Text:
    """Render an item as styled rich text for the terminal."""
    text = Text()
    for style, line in iter_render_lines(item):
        text.append(line, style=style or None)
        text.append("\n")
    return text


def render_raw(item: WordItem) -> str:
    """Render an item as plain text: no styles, no directive prefixes."""
    return "".join(line + "\n" for _, line in iter_render_lines(item))
