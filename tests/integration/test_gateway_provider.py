"""
Integration tests for the gateway provider over a mocked HTTP transport.
"""

import json

import httpx
import pytest

from deckforge.application.services import GenerationLog
from deckforge.application.use_cases import GeneratePlanUseCase
from deckforge.domain.entities import InlineImage
from deckforge.domain.exceptions import (
    ContentMissingError,
    QuotaOrPermissionError,
    SchemaError,
    TransportError,
)
from deckforge.domain.value_objects import LogEntryType
from deckforge.infra.llm import GatewayProvider, create_provider

API_KEY = "sk-gateway-secret"


def _chat_completion(content: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1_700_000_000,
        "model": "google/gemini-2.5-flash",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
    }


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self.payload = payload
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def _provider(settings, handler) -> GatewayProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GatewayProvider(API_KEY, settings, http_client=client)


class TestGatewayPlan:
    @pytest.mark.asyncio
    async def test_plan_request_shape(self, settings, sample_plan_json):
        handler = Recorder(payload=_chat_completion(sample_plan_json))
        provider = _provider(settings, handler)

        text = await provider.generate_plan("system", "user")

        assert json.loads(text)["topic"] == "Acme Corp Q3 Results"
        request = handler.requests[0]
        assert str(request.url) == "https://zenmux.ai/api/v1/chat/completions"
        assert request.headers["Authorization"] == f"Bearer {API_KEY}"
        body = handler.last_json
        assert body["model"] == "google/gemini-2.5-flash"
        assert body["response_format"] == {"type": "json_object"}
        assert [m["role"] for m in body["messages"]] == ["system", "user"]

    @pytest.mark.asyncio
    async def test_plan_log_entries_redact_credential(self, settings, sample_plan_json):
        handler = Recorder(payload=_chat_completion(sample_plan_json))
        provider = _provider(settings, handler)
        log = GenerationLog()

        await provider.generate_plan("system", "user", log_sink=log)

        request_entry, response_entry = log.entries
        assert request_entry.type is LogEntryType.REQUEST
        assert request_entry.headers["Authorization"] == "Bearer ***"
        assert request_entry.url == "https://zenmux.ai/api/v1/chat/completions"
        assert response_entry.type is LogEntryType.RESPONSE
        assert API_KEY not in " ".join(str(entry) for entry in log.entries)

    @pytest.mark.asyncio
    async def test_plan_server_error_is_transport_error(self, settings):
        provider = _provider(settings, Recorder(500, {"error": {"message": "upstream exploded"}}))

        with pytest.raises(TransportError) as exc_info:
            await provider.generate_plan("system", "user")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_empty_content_is_schema_error(self, settings):
        provider = _provider(settings, Recorder(payload=_chat_completion("")))

        with pytest.raises(SchemaError):
            await provider.generate_plan("system", "user")

    @pytest.mark.asyncio
    async def test_use_case_end_to_end(self, settings, sample_plan_json):
        """Test the full gateway plan path produces a three-slide plan."""
        handler = Recorder(payload=_chat_completion(f"```json\n{sample_plan_json}\n```"))
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        use_case = GeneratePlanUseCase(
            lambda provider_id, credentials: create_provider(
                provider_id, credentials, settings, http_client=client
            )
        )

        plan = await use_case.execute("Acme report", 3, provider="gateway", credentials=API_KEY)

        assert plan.topic == "Acme Corp Q3 Results"
        assert plan.slide_count == 3
        assert all(slide.selected_image_ids == [] for slide in plan.slides)
        assert "RESPONSE FORMAT INSTRUCTIONS" in handler.last_json["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_use_case_server_error_yields_placeholder(self, settings):
        handler = Recorder(500, {"error": {"message": "upstream exploded"}})
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        use_case = GeneratePlanUseCase(
            lambda provider_id, credentials: create_provider(
                provider_id, credentials, settings, http_client=client
            )
        )

        plan = await use_case.execute("Acme report", 4, provider="gateway", credentials=API_KEY)

        assert plan.topic == "Generated Presentation"
        assert plan.slide_count == 4
        assert len(handler.requests) == 1


class TestGatewayImage:
    @pytest.mark.asyncio
    async def test_image_request_shape(self, settings, image_asset):
        handler = Recorder(payload={"imageBase64": "SU1BR0U="})
        provider = _provider(settings, handler)
        reference = InlineImage.from_data_uri(image_asset.data_url)

        payload = await provider.generate_image("Draw it", [reference], provider.image_model, "4K")

        assert payload == "SU1BR0U="
        request = handler.requests[0]
        assert str(request.url) == (
            "https://zenmux.ai/api/vertex-ai/v1/models/"
            "google/gemini-3-pro-image-preview:generateContent"
        )
        assert request.headers["Authorization"] == f"Bearer {API_KEY}"
        body = handler.last_json
        parts = body["contents"][0]["parts"]
        assert body["contents"][0]["role"] == "user"
        assert parts[0] == {"inlineData": {"mimeType": "image/png", "data": reference.data}}
        assert parts[-1] == {"text": "Draw it"}
        assert body["generationConfig"]["imageConfig"] == {"aspectRatio": "16:9", "imageSize": "4K"}

    @pytest.mark.asyncio
    async def test_fallback_request_has_no_image_size(self, settings):
        handler = Recorder(payload={"imageBase64": "SU1BR0U="})
        provider = _provider(settings, handler)

        await provider.generate_image("Draw it", [], provider.fallback_image_model)

        assert handler.last_json["generationConfig"]["imageConfig"] == {"aspectRatio": "16:9"}
        assert "gemini-2.5-flash-image" in str(handler.requests[0].url)

    @pytest.mark.asyncio
    async def test_nested_inline_data(self, settings):
        payload = {
            "candidates": [
                {"content": {"parts": [{"text": "ok"}, {"inlineData": {"data": "TkVTVEVE"}}]}}
            ]
        }
        provider = _provider(settings, Recorder(payload=payload))

        assert await provider.generate_image("p", [], "m") == "TkVTVEVE"

    @pytest.mark.asyncio
    async def test_forbidden_is_quota_or_permission(self, settings):
        provider = _provider(settings, Recorder(403, {"error": {"message": "Forbidden"}}))

        with pytest.raises(QuotaOrPermissionError) as exc_info:
            await provider.generate_image("p", [], "m")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "403 Forbidden"

    @pytest.mark.asyncio
    async def test_server_error_is_transport(self, settings):
        provider = _provider(settings, Recorder(500, {"error": "overloaded"}))

        with pytest.raises(TransportError):
            await provider.generate_image("p", [], "m")

    @pytest.mark.asyncio
    async def test_response_without_image(self, settings):
        provider = _provider(settings, Recorder(payload={"candidates": []}))

        with pytest.raises(ContentMissingError):
            await provider.generate_image("p", [], "m")

    @pytest.mark.asyncio
    async def test_network_error_is_transport(self, settings):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        provider = _provider(settings, handler)

        with pytest.raises(TransportError):
            await provider.generate_image("p", [], "m")

    @pytest.mark.asyncio
    async def test_image_log_elides_payloads(self, settings, image_asset):
        handler = Recorder(payload={"imageBase64": "A" * 64})
        provider = _provider(settings, handler)
        log = GenerationLog()
        reference = InlineImage.from_data_uri(image_asset.data_url)

        await provider.generate_image("p", [reference], "m", log_sink=log)

        request_entry, response_entry = log.entries
        assert request_entry.headers == {"Content-Type": "application/json", "Authorization": "Bearer ***"}
        sent = request_entry.body["contents"][0]["parts"][0]["inlineData"]["data"]
        assert sent == f"<{len(reference.data)} base64 chars>"
        assert response_entry.response == {"imageBase64": "<64 base64 chars>"}
