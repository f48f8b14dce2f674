"""Endpoint-to-provider registry."""

from collections.abc import Callable

from vocabnote.config import Settings, settings
from vocabnote.exceptions import InvalidEndpointError
from vocabnote.services.dictionary.base import DictProvider, Endpoint
from vocabnote.services.dictionary.chatgpt import ChatGPTProvider
from vocabnote.services.dictionary.ecdict import ECDictProvider
from vocabnote.services.dictionary.etymonline import EtymonlineProvider
from vocabnote.services.dictionary.mwebster import MWebsterProvider
from vocabnote.services.dictionary.youdao import YoudaoProvider

ProviderFactory = Callable[[Settings], DictProvider]

PROVIDERS: dict[Endpoint, ProviderFactory] = {
    Endpoint.YOUDAO: lambda s: YoudaoProvider(timeout=s.http_timeout),
    Endpoint.ETYMONLINE: lambda s: EtymonlineProvider(timeout=s.http_timeout),
    Endpoint.ECDICT: lambda s: ECDictProvider(s.resolved_ecdict_path),
    Endpoint.CHATGPT: lambda s: ChatGPTProvider(api_key=s.openai_api_key, model=s.openai_model),
    Endpoint.MWEBSTER: lambda s: MWebsterProvider(s.mwebster_api_key, timeout=s.http_timeout),
}


def available_endpoints() -> list[str]:
    """Return the identifiers of all registered providers."""
    return [endpoint.value for endpoint in PROVIDERS]


def get_provider(endpoint: Endpoint | str, config: Settings | None = None) -> DictProvider:
    """
    Build the provider registered for an endpoint.

    Args:
        endpoint: Endpoint enum member or its string identifier
        config: Settings to build the provider from (defaults to global settings)

    Raises:
        InvalidEndpointError: No provider is registered for the identifier
    """
    try:
        key = Endpoint(endpoint)
    except ValueError:
        raise InvalidEndpointError(str(endpoint)) from None

    factory = PROVIDERS.get(key)
    if factory is None:
        raise InvalidEndpointError(key.value)
    return factory(config or settings)
