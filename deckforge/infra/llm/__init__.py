"""LLM provider transports."""

from .factory import create_provider
from .gateway_client import GatewayProvider
from .managed_client import ManagedProvider
from .mock_client import MockProvider

__all__ = ["GatewayProvider", "ManagedProvider", "MockProvider", "create_provider"]
