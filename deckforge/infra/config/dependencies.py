"""
FastAPI dependency providers.

One process serves one in-memory generation session.
"""

from typing import Optional

from deckforge.application.services import GenerationSession
from deckforge.application.use_cases.generate_plan import ProviderFactory
from deckforge.domain.value_objects import ProviderId
from deckforge.infra.config.settings import Settings, get_settings
from deckforge.infra.content import ContentAggregator
from deckforge.infra.llm import MockProvider, create_provider

_session: Optional[GenerationSession] = None


def build_provider_factory(settings: Settings) -> ProviderFactory:
    """Provider factory for new sessions; USE_MOCK_PROVIDER swaps in MockProvider."""
    if settings.use_mock_provider:
        return lambda provider, credentials: MockProvider(ProviderId(provider))
    return lambda provider, credentials: create_provider(provider, credentials, settings)


def get_session() -> GenerationSession:
    """Get the process-wide generation session."""
    global _session
    if _session is None:
        settings = get_settings()
        _session = GenerationSession(settings, build_provider_factory(settings))
    return _session


def reset_session() -> None:
    """Drop the current session (start a new project)."""
    global _session
    _session = None


def get_content_aggregator() -> ContentAggregator:
    return ContentAggregator()
