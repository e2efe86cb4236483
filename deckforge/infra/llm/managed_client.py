"""
Managed SDK provider backed by the google-genai client.
"""

import base64
from typing import Any, List, Optional, Type

from google import genai
from google.genai import types
from pydantic import BaseModel

from deckforge.application.ports import LogSink, ProviderPort, emit
from deckforge.domain.entities import GenerationLogEntry, InlineImage
from deckforge.domain.exceptions import ContentMissingError, SchemaError
from deckforge.domain.value_objects import LogEntryType, ProviderId
from deckforge.infra.config.logging_config import get_logger
from deckforge.infra.config.settings import Settings
from deckforge.infra.llm.errors import translate_error
from deckforge.infra.llm.response_parsing import NO_IMAGE_MESSAGE


class ManagedProvider(ProviderPort):
    """Provider using the vendor SDK with server-side JSON schemas."""

    provider_id = ProviderId.MANAGED

    def __init__(self, api_key: str, settings: Settings, client: Optional[Any] = None):
        self.plan_model = settings.managed_plan_model
        self.image_model = settings.managed_image_model
        self.fallback_image_model = settings.managed_fallback_image_model
        self._aspect_ratio = settings.image_aspect_ratio

        if client is None:
            http_options = None
            if settings.request_timeout:
                # SDK timeouts are expressed in milliseconds
                http_options = types.HttpOptions(timeout=int(settings.request_timeout * 1000))
            client = genai.Client(api_key=api_key, http_options=http_options)
        self._client = client
        self._log = get_logger("infra.llm.managed")

    async def generate_plan(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: Optional[Type[BaseModel]] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            response_mime_type="application/json",
            response_schema=response_model,
        )
        emit(
            log_sink,
            GenerationLogEntry(
                type=LogEntryType.REQUEST,
                message=f"Calling {self.plan_model} via SDK",
            ),
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self.plan_model, contents=user_prompt, config=config
            )
        except Exception as exc:
            raise translate_error(exc, self.provider_id.value) from exc

        emit(
            log_sink,
            GenerationLogEntry(type=LogEntryType.RESPONSE, message="SDK response received"),
        )
        self._log.info("llm.invoke.structured", model=self.plan_model)

        text = getattr(response, "text", None)
        if not text:
            raise SchemaError("Empty response from model", provider=self.provider_id.value)
        return text

    async def generate_image(
        self,
        prompt: str,
        images: List[InlineImage],
        model: str,
        image_size: Optional[str] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        parts = [
            types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type)
            for image in images
        ]
        parts.append(types.Part.from_text(text=prompt))

        if image_size:
            image_config = types.ImageConfig(aspect_ratio=self._aspect_ratio, image_size=image_size)
        else:
            image_config = types.ImageConfig(aspect_ratio=self._aspect_ratio)

        emit(
            log_sink,
            GenerationLogEntry(
                type=LogEntryType.REQUEST,
                message=f"Calling {model} via SDK",
                body={
                    "model": model,
                    "referenceImages": len(images),
                    "imageConfig": {"aspectRatio": self._aspect_ratio, "imageSize": image_size},
                },
            ),
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=types.Content(role="user", parts=parts),
                config=types.GenerateContentConfig(image_config=image_config),
            )
        except Exception as exc:
            raise translate_error(exc, self.provider_id.value) from exc

        emit(
            log_sink,
            GenerationLogEntry(type=LogEntryType.RESPONSE, message=f"{model} success"),
        )
        self._log.info("llm.invoke.image", model=model, reference_images=len(images))
        return self._extract_image(response)

    def _extract_image(self, response: Any) -> str:
        candidates = getattr(response, "candidates", None) or []
        parts = []
        if candidates and getattr(candidates[0], "content", None) is not None:
            parts = candidates[0].content.parts or []

        for part in parts:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                data = inline.data
                if isinstance(data, (bytes, bytearray)):
                    return base64.b64encode(data).decode("ascii")
                return str(data)

        raise ContentMissingError(NO_IMAGE_MESSAGE, provider=self.provider_id.value)
