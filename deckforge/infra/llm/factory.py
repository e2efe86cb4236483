"""
Provider factory: selects the transport variant for a provider id.
"""

from typing import Optional, Union

import httpx

from deckforge.application.ports import ProviderPort
from deckforge.domain.exceptions import ConfigurationError
from deckforge.domain.value_objects import ProviderId
from deckforge.infra.config.settings import Settings, get_settings
from deckforge.infra.llm.gateway_client import GatewayProvider
from deckforge.infra.llm.managed_client import ManagedProvider


def create_provider(
    provider: Union[ProviderId, str],
    credentials: Optional[str],
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ProviderPort:
    """
    Build a provider bound to ``credentials``.

    Args:
        provider: Provider id ("managed" or "gateway")
        credentials: API key for the provider
        settings: Application settings; defaults to the global settings
        http_client: Optional shared httpx client for the gateway transport

    Raises:
        ConfigurationError: If the credential is missing or the provider is unknown
    """
    settings = settings or get_settings()

    try:
        provider_id = ProviderId(provider)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown provider: {provider}") from exc

    if not credentials or not credentials.strip():
        raise ConfigurationError(
            f"An API key is required for the {provider_id.value} provider",
            provider=provider_id.value,
        )

    if provider_id is ProviderId.GATEWAY:
        return GatewayProvider(credentials, settings, http_client=http_client)
    return ManagedProvider(credentials, settings)
