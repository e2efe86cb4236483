"""
Application ports - abstract interfaces for external dependencies.

These interfaces define the contracts that the use cases need from the
provider transports and the session log, following the Dependency Inversion
Principle.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Type

from pydantic import BaseModel

from deckforge.domain.entities import GenerationLogEntry, InlineImage
from deckforge.domain.value_objects import ProviderId


class LogSink(ABC):
    """Append-only receiver of generation log entries."""

    @abstractmethod
    def record(self, entry: GenerationLogEntry) -> None:
        """Append one entry."""
        pass


class ProviderPort(ABC):
    """
    Abstract interface for a generation backend bound to one credential.

    Implementations translate every failure into a ``GenerationError`` subclass
    before it leaves the port.
    """

    provider_id: ProviderId
    image_model: str
    fallback_image_model: str

    @property
    def supports_response_schema(self) -> bool:
        return self.provider_id.supports_response_schema()

    @abstractmethod
    async def generate_plan(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: Optional[Type[BaseModel]] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        """Return the raw JSON text of a structured plan.

        ``response_model`` is only honoured by providers that support
        machine-checked schemas.
        """
        pass

    @abstractmethod
    async def generate_image(
        self,
        prompt: str,
        images: List[InlineImage],
        model: str,
        image_size: Optional[str] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        """Return the base64 payload of the first generated image.

        Reference images are sent ahead of the text prompt, in order.
        ``image_size=None`` requests the model's default resolution.
        """
        pass


def emit(log_sink: Optional[LogSink], entry: GenerationLogEntry) -> None:
    """Record ``entry`` when a sink is attached."""
    if log_sink is not None:
        log_sink.record(entry)
