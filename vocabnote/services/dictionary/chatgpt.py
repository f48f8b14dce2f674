"""LLM-backed dictionary provider."""

import logging
from typing import Any

from openai import OpenAIError

from vocabnote.exceptions import TransportError
from vocabnote.services import llm
from vocabnote.services.dictionary.base import DictProvider, WordDefine, WordItem
from vocabnote.services.dictionary.markup import HIGHLIGHT_PREFIX, QUOTE_PREFIX

logger = logging.getLogger(__name__)

DEFINITION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "found": {"type": "boolean"},
        "defines": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "phonetics": {"type": "array", "items": {"type": "string"}},
                    "definition": {"type": "string"},
                },
                "required": ["phonetics", "definition"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["found", "defines"],
    "additionalProperties": False,
}

SYSTEM_PROMPT = "You are an English learner's dictionary."


class ChatGPTProvider(DictProvider):
    """Ask an OpenAI chat model for dictionary-style definitions."""

    def __init__(self, api_key: str = "", model: str | None = None) -> None:
        self.api_key = api_key
        self.model = model

    @property
    def name(self) -> str:
        return "chatgpt"

    def _build_prompt(self, word: str) -> str:
        """Build the definition prompt, explaining the line markup to the model."""
        return f"""Define: "{word}"

Return one entry per part of speech or distinct sense group.
For each entry give IPA phonetics (may be empty) and a definition text.
Format the definition text line by line:
- Start the first line with "{HIGHLIGHT_PREFIX}" followed by the headword and part of speech
- Start each example sentence line with "{QUOTE_PREFIX}"
- Write every other line as plain text
Set "found" to false and return no entries if "{word}" is not an English word or phrase."""

    async def search(self, word: str) -> WordItem:
        if not self.api_key:
            raise TransportError(self.name, word, "no OpenAI API key configured")

        try:
            data = await llm.chat_completion(
                self._build_prompt(word),
                DEFINITION_SCHEMA,
                "word_definition",
                model=self.model,
                system=SYSTEM_PROMPT,
                api_key=self.api_key,
            )
        except OpenAIError as e:
            raise TransportError(self.name, word, f"OpenAI request failed: {e}") from e
        except ValueError as e:
            raise TransportError(self.name, word, f"invalid response: {e}") from e

        if not data.get("found") or not data.get("defines"):
            return WordItem.not_found(word)

        try:
            defines = tuple(
                WordDefine(phonetics=tuple(d["phonetics"]), definition=d["definition"])
                for d in data["defines"]
            )
        except (KeyError, TypeError) as e:
            raise TransportError(self.name, word, f"invalid response: {e}") from e
        return WordItem(word=word, defines=defines)
