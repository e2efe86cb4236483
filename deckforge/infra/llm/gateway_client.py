"""
Gateway provider for an OpenAI-compatible HTTP gateway.

The chat step goes through LangChain's ``ChatOpenAI`` pointed at the gateway
base URL; the image step posts a generateContent-style body with httpx.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Type

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from deckforge.application.ports import LogSink, ProviderPort, emit
from deckforge.domain.entities import GenerationLogEntry, InlineImage
from deckforge.domain.exceptions import SchemaError
from deckforge.domain.value_objects import LogEntryType, ProviderId
from deckforge.infra.config.logging_config import get_logger
from deckforge.infra.config.settings import Settings
from deckforge.infra.llm.errors import classify_http_failure, translate_error
from deckforge.infra.llm.response_parsing import (
    elide_image_payloads,
    error_message_from_payload,
    extract_image_base64,
)

JSON_OBJECT_FORMAT = {"type": "json_object"}
REDACTED_HEADERS = {"Content-Type": "application/json", "Authorization": "Bearer ***"}


class GatewayProvider(ProviderPort):
    """Provider reaching models through a bearer-authenticated HTTP gateway."""

    provider_id = ProviderId.GATEWAY

    def __init__(
        self,
        api_key: str,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.plan_model = settings.gateway_plan_model
        self.image_model = settings.gateway_image_model
        self.fallback_image_model = settings.gateway_fallback_image_model
        self._settings = settings
        self._api_key = api_key
        self._http_client = http_client

        llm_kwargs = {
            "model": self.plan_model,
            "api_key": api_key,
            "base_url": settings.gateway_chat_base_url,
            "max_retries": 0,
        }
        if settings.request_timeout:
            llm_kwargs["timeout"] = settings.request_timeout
        if http_client is not None:
            llm_kwargs["http_async_client"] = http_client

        self.llm = ChatOpenAI(**llm_kwargs)
        self._log = get_logger("infra.llm.gateway")

    async def generate_plan(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: Optional[Type[BaseModel]] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        messages: List[BaseMessage] = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]
        emit(
            log_sink,
            GenerationLogEntry(
                type=LogEntryType.REQUEST,
                url=f"{self._settings.gateway_chat_base_url}/chat/completions",
                method="POST",
                headers=dict(REDACTED_HEADERS),
                body={
                    "model": self.plan_model,
                    "messages": [
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    "response_format": JSON_OBJECT_FORMAT,
                },
            ),
        )

        try:
            response = await self.llm.bind(response_format=JSON_OBJECT_FORMAT).ainvoke(messages)
        except Exception as exc:
            error = translate_error(exc, self.provider_id.value)
            emit(log_sink, GenerationLogEntry(type=LogEntryType.RESPONSE, response={"error": error.message}))
            raise error from exc

        content = response.content if isinstance(response.content, str) else ""
        emit(
            log_sink,
            GenerationLogEntry(
                type=LogEntryType.RESPONSE,
                response={"content": content, "metadata": response.response_metadata},
            ),
        )
        self._log.info("llm.invoke.text", model=self.plan_model)

        if not content:
            raise SchemaError("No content in gateway response", provider=self.provider_id.value)
        return content

    async def generate_image(
        self,
        prompt: str,
        images: List[InlineImage],
        model: str,
        image_size: Optional[str] = None,
        log_sink: Optional[LogSink] = None,
    ) -> str:
        url = self._settings.gateway_image_url(model)
        body = self._build_image_body(prompt, images, image_size)
        emit(
            log_sink,
            GenerationLogEntry(
                type=LogEntryType.REQUEST,
                url=url,
                method="POST",
                headers=dict(REDACTED_HEADERS),
                body=elide_image_payloads(body),
            ),
        )

        try:
            async with self._client() as client:
                response = await client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise translate_error(exc, self.provider_id.value) from exc

        try:
            data = response.json()
        except ValueError:
            data = {"raw": response.text}
        emit(
            log_sink,
            GenerationLogEntry(type=LogEntryType.RESPONSE, response=elide_image_payloads(data)),
        )

        if response.is_error:
            message = error_message_from_payload(data, "Gateway image API error")
            raise classify_http_failure(
                f"{response.status_code} {message}",
                response.status_code,
                self.provider_id.value,
            )

        self._log.info("llm.invoke.image", model=model, reference_images=len(images))
        return extract_image_base64(data, provider=self.provider_id.value)

    def _build_image_body(
        self, prompt: str, images: List[InlineImage], image_size: Optional[str]
    ) -> Dict:
        parts: List[Dict] = [
            {"inlineData": {"mimeType": image.mime_type, "data": image.data}}
            for image in images
        ]
        parts.append({"text": prompt})

        image_config = {"aspectRatio": self._settings.image_aspect_ratio}
        if image_size:
            image_config["imageSize"] = image_size

        return {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"imageConfig": image_config},
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        client_kwargs = {}
        if self._settings.request_timeout:
            client_kwargs["timeout"] = self._settings.request_timeout
        async with httpx.AsyncClient(**client_kwargs) as client:
            yield client
