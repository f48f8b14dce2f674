"""Online Etymology Dictionary provider."""

import logging
import re
from urllib.parse import quote as url_quote

import httpx
from bs4 import BeautifulSoup

from vocabnote.exceptions import TransportError
from vocabnote.services.dictionary import markup
from vocabnote.services.dictionary.base import DictProvider, WordDefine, WordItem
from vocabnote.services.dictionary.http import fetch

logger = logging.getLogger(__name__)

HOST = "https://www.etymonline.com"

_ENTRY_CLASS = re.compile(r"^word--")
_NAME_CLASS = re.compile(r"^word__name--")


def parse_page(word: str, html: str) -> WordItem:
    """
    Extract etymology entries from a word page.

    Each entry becomes one define: a highlighted headword line followed by
    its paragraphs, with quoted passages (blockquotes) tagged as quotes.
    """
    soup = BeautifulSoup(html, "html.parser")
    defines: list[WordDefine] = []

    for entry in soup.select("div.ant-col-xs-24 > *"):
        if not any(_ENTRY_CLASS.match(c) for c in entry.get("class", [])):
            continue

        lines: list[str] = []
        heading = entry.find(class_=_NAME_CLASS)
        if heading is not None:
            lines.append(markup.highlight(" ".join(heading.get_text().split())))

        section = entry.find("section")
        if section is not None:
            for para in section.find_all(recursive=False):
                text = " ".join(para.get_text().split())
                if not text:
                    continue
                lines.append(markup.quote(text) if para.name == "blockquote" else text)

        if lines:
            defines.append(WordDefine(definition="\n".join(lines)))

    return WordItem(word=word, defines=tuple(defines))


class EtymonlineProvider(DictProvider):
    """Scrape word pages of etymonline.com."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "etymonline"

    async def search(self, word: str) -> WordItem:
        response = await fetch(
            self.name,
            word,
            f"{HOST}/word/{url_quote(word)}",
            timeout=self.timeout,
            transport=self._transport,
        )
        # Unknown words get a 404 page
        if response.status_code == 404:
            return WordItem.not_found(word)
        if response.status_code != 200:
            raise TransportError(self.name, word, f"unexpected status {response.status_code}")
        return parse_page(word, response.text)
