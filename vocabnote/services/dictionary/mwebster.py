"""Merriam-Webster Collegiate Dictionary API provider."""

import logging
from typing import Any
from urllib.parse import quote as url_quote

import httpx

from vocabnote.exceptions import TransportError
from vocabnote.services.dictionary import markup
from vocabnote.services.dictionary.base import DictProvider, WordDefine, WordItem
from vocabnote.services.dictionary.http import fetch

logger = logging.getLogger(__name__)

API_URL = "https://www.dictionaryapi.com/api/v3/references/collegiate/json"


def parse_entries(word: str, data: Any) -> WordItem:
    """
    Convert the API's JSON payload into a WordItem.

    An unknown word comes back as an empty list or as a list of spelling
    suggestions (plain strings).
    """
    if not isinstance(data, list):
        raise ValueError("expected a JSON list")
    if not data or isinstance(data[0], str):
        return WordItem.not_found(word)

    defines: list[WordDefine] = []
    for entry in data:
        if not isinstance(entry, dict):
            continue
        hwi = entry.get("hwi", {})
        headword = str(hwi.get("hw", word)).replace("*", "")
        function_label = entry.get("fl")
        phonetics = tuple(p["mw"] for p in hwi.get("prs", []) if "mw" in p)

        heading = f"{headword} ({function_label})" if function_label else headword
        lines = [markup.highlight(heading)]
        lines.extend(str(sense) for sense in entry.get("shortdef", []))
        defines.append(WordDefine(phonetics=phonetics, definition="\n".join(lines)))

    return WordItem(word=word, defines=tuple(defines))


class MWebsterProvider(DictProvider):
    """Query the Merriam-Webster Collegiate JSON API (requires an API key)."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "mwebster"

    async def search(self, word: str) -> WordItem:
        if not self.api_key:
            raise TransportError(self.name, word, "no Merriam-Webster API key configured")

        response = await fetch(
            self.name,
            word,
            f"{API_URL}/{url_quote(word)}",
            params={"key": self.api_key},
            timeout=self.timeout,
            transport=self._transport,
        )
        if response.status_code in (401, 403):
            raise TransportError(self.name, word, "API key rejected")
        if response.status_code != 200:
            raise TransportError(self.name, word, f"unexpected status {response.status_code}")

        try:
            return parse_entries(word, response.json())
        except (ValueError, TypeError, AttributeError) as e:
            raise TransportError(self.name, word, f"unexpected response: {e}") from e
