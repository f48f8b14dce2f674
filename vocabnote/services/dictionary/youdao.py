"""Youdao web dictionary provider."""

import logging

import httpx
from bs4 import BeautifulSoup

from vocabnote.exceptions import TransportError
from vocabnote.services.dictionary.base import DictProvider, WordDefine, WordItem
from vocabnote.services.dictionary.http import fetch

logger = logging.getLogger(__name__)

HOST = "https://dict.youdao.com"


def _squash(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return " ".join(text.split())


def parse_page(word: str, html: str) -> WordItem:
    """Extract phonetics and translations from a Youdao search page."""
    soup = BeautifulSoup(html, "html.parser")

    keyword = soup.select_one("span.keyword")
    if keyword is None or not keyword.get_text(strip=True):
        return WordItem.not_found(word)

    phonetics = [
        _squash(span.get_text())
        for span in soup.select("#phrsListTab > h2 > div > span")[:2]
        if span.get_text(strip=True)
    ]

    lines: list[str] = []
    trans = soup.select_one("#phrsListTab > div.trans-container > ul")
    if trans is not None:
        items = trans.find_all("li")
        if items:
            lines = [_squash(li.get_text()) for li in items]
        else:
            lines = [_squash(line) for line in trans.get_text().split("\n")]
    lines = [line for line in lines if line]

    return WordItem(
        word=word,
        defines=(WordDefine(phonetics=tuple(phonetics), definition="\n".join(lines)),),
    )


class YoudaoProvider(DictProvider):
    """Scrape the Youdao dictionary search page."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "youdao"

    async def search(self, word: str) -> WordItem:
        response = await fetch(
            self.name,
            word,
            f"{HOST}/search",
            params={"q": word},
            timeout=self.timeout,
            transport=self._transport,
        )
        if response.status_code != 200:
            raise TransportError(self.name, word, f"unexpected status {response.status_code}")
        return parse_page(word, response.text)
