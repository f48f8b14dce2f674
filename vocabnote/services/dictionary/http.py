"""HTTP helper shared by the web-backed dictionary providers."""

import logging
from typing import Any

import httpx

from vocabnote.exceptions import TransportError

logger = logging.getLogger(__name__)

# Some dictionary sites serve a reduced page to unknown clients
DEFAULT_HEADERS = {
    "Accept": "*/*",
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/114.0.0.0 Safari/537.36"
    ),
}


async def fetch(
    endpoint: str,
    word: str,
    url: str,
    params: dict[str, Any] | None = None,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """
    Send a GET request on behalf of a provider.

    The status code is left for the caller to interpret, since several sites
    answer an unknown word with 404.

    Args:
        endpoint: Provider name, used for error context
        word: Word being looked up, used for error context
        url: Target URL
        params: Optional query parameters
        timeout: Request timeout in seconds
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        The fully read response

    Raises:
        TransportError: The request could not be completed
    """
    logger.debug(f"GET {url} params={params}")
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            follow_redirects=True,
            transport=transport,
        ) as client:
            return await client.get(url, params=params)
    except httpx.HTTPError as e:
        raise TransportError(endpoint, word, f"request to {url} failed: {e}") from e
