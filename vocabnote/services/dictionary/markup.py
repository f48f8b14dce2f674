"""Line-prefix markup embedded in definition text.

Providers tag definition lines with a four-character prefix:

- ``----`` marks a quoted/secondary line (rendered muted)
- ``++++`` marks a highlighted/heading line (rendered in an accent colour)
- anything else is plain prose

The encoding is linear and stateless. There is no escaping, so a content line
that really starts with ``----`` or ``++++`` is read as a directive.
"""

from dataclasses import dataclass
from enum import Enum

QUOTE_PREFIX = "----"
HIGHLIGHT_PREFIX = "++++"


class LineStyle(str, Enum):
    """Render style of one definition line."""

    PLAIN = "plain"
    QUOTE = "quote"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class MarkupLine:
    """One decoded definition line with its prefix stripped."""

    style: LineStyle
    text: str


_PREFIXES = (
    (QUOTE_PREFIX, LineStyle.QUOTE),
    (HIGHLIGHT_PREFIX, LineStyle.HIGHLIGHT),
)


def decode_line(line: str) -> MarkupLine:
    """Classify a single line by its prefix."""
    for prefix, style in _PREFIXES:
        if line.startswith(prefix):
            return MarkupLine(style, line[len(prefix) :])
    return MarkupLine(LineStyle.PLAIN, line)


def decode(definition: str) -> list[MarkupLine]:
    """Split definition text on newlines and classify every line."""
    return [decode_line(line) for line in definition.split("\n")]


def raw_text(definition: str) -> str:
    """Return the definition with directive prefixes stripped."""
    return "\n".join(line.text for line in decode(definition))


def quote(text: str) -> str:
    """Tag a line as quoted/secondary."""
    return QUOTE_PREFIX + text


def highlight(text: str) -> str:
    """Tag a line as highlighted/heading."""
    return HIGHLIGHT_PREFIX + text
