"""
Mock provider for testing and offline development.
"""

import json
from typing import List, Optional, Type

from pydantic import BaseModel

from deckforge.application.ports import LogSink, ProviderPort, emit
from deckforge.domain.entities import GenerationLogEntry, InlineImage
from deckforge.domain.value_objects import LogEntryType, ProviderId

# 1x1 transparent PNG
MOCK_IMAGE_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class MockProvider(ProviderPort):
    """Provider that returns canned plans and a tiny PNG for every slide."""

    image_model = "mock-image"
    fallback_image_model = "mock-image-lite"

    def __init__(self, provider_id: ProviderId = ProviderId.GATEWAY, slide_count: int = 3):
        self.provider_id = provider_id
        self.slide_count = slide_count
        self.image_calls: List[str] = []

    async def generate_plan(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: Optional[Type[BaseModel]] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        emit(log_sink, GenerationLogEntry(type=LogEntryType.REQUEST, message="mock plan request"))
        plan = {
            "topic": "Machine Learning Basics",
            "slides": [
                {
                    "id": f"slide-{i + 1}",
                    "title": f"Topic {i + 1}",
                    "bullets": [
                        f"Key insight number {i + 1} explained in a full sentence.",
                        "Supporting evidence drawn from the source material.",
                    ],
                    "visualNote": "A clean diagram with a single highlighted concept.",
                }
                for i in range(self.slide_count)
            ],
        }
        emit(log_sink, GenerationLogEntry(type=LogEntryType.RESPONSE, message="mock plan response"))
        return json.dumps(plan)

    async def generate_image(
        self,
        prompt: str,
        images: List[InlineImage],
        model: str,
        image_size: Optional[str] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        self.image_calls.append(model)
        emit(log_sink, GenerationLogEntry(type=LogEntryType.REQUEST, message=f"mock image via {model}"))
        return MOCK_IMAGE_BASE64
