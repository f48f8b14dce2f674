"""OpenAI chat client returning structured JSON."""

import json
import logging
from typing import Any, cast

from openai import AsyncOpenAI

from vocabnote.config import settings

logger = logging.getLogger(__name__)

# One client per API key so providers with their own key never share a session
_clients: dict[str, AsyncOpenAI] = {}


def get_client(api_key: str | None = None) -> AsyncOpenAI:
    """Return the cached client for ``api_key``, or for the configured key."""
    key = settings.openai_api_key if api_key is None else api_key
    client = _clients.get(key)
    if client is None:
        client = AsyncOpenAI(api_key=key, timeout=settings.openai_timeout)
        _clients[key] = client
    return client


async def chat_completion(
    prompt: str,
    schema: dict[str, Any],
    schema_name: str,
    model: str | None = None,
    system: str | None = None,
    api_key: str | None = None,
) -> dict[str, Any]:
    """
    Ask the model for a reply matching ``schema`` and return it parsed.

    Args:
        prompt: The user message
        schema: JSON schema the reply must follow
        schema_name: Name reported to the API for the schema
        model: Model override (defaults to settings.openai_model)
        system: Optional system message sent before the prompt
        api_key: Key to authenticate with (defaults to settings.openai_api_key)

    Raises:
        OpenAIError: Any failure reported by the client
        ValueError: Empty or non-JSON reply
    """
    client = get_client(api_key)
    model = model or settings.openai_model

    messages: list[dict[str, str]] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    logger.debug(f"Requesting {schema_name} from {model}")
    response = await client.chat.completions.create(
        model=model,
        messages=messages,  # type: ignore[arg-type]
        response_format={
            "type": "json_schema",
            "json_schema": {"name": schema_name, "strict": True, "schema": schema},
        },
    )

    content = response.choices[0].message.content
    if not content:
        raise ValueError(f"empty {schema_name} reply from {model}")
    return cast(dict[str, Any], json.loads(content))
