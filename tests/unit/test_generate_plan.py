"""
Unit tests for the plan generation use case.
"""

import json
from unittest.mock import Mock

import pytest
import structlog

from deckforge.application.prompts import PlanDraft
from deckforge.application.services import GenerationLog
from deckforge.application.use_cases import GeneratePlanUseCase
from deckforge.domain.exceptions import ConfigurationError, TransportError
from deckforge.domain.value_objects import Language, LogEntryType, ProviderId
from tests._helpers.fakes import FakeProvider, factory_for


def _use_case(provider):
    return GeneratePlanUseCase(factory_for(provider))


class TestGeneratePlanSuccess:
    @pytest.mark.asyncio
    async def test_gateway_plan_from_json_object(self, sample_plan_json):
        """Test a valid gateway response becomes a plan with cleared selections."""
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=sample_plan_json)

        plan = await _use_case(provider).execute(
            "Acme Corp quarterly report",
            3,
            provider="gateway",
            credentials="sk-test",
            style="Minimal, blue accents",
            requirements="Lead with revenue",
        )

        assert plan.topic == "Acme Corp Q3 Results"
        assert plan.slide_count == 3
        assert [slide.id for slide in plan.slides] == ["slide-1", "slide-2", "slide-3"]
        assert all(slide.selected_image_ids == [] for slide in plan.slides)
        assert plan.slides[0].visual_note.startswith("A rising bar chart")
        assert plan.style == "Minimal, blue accents"
        assert plan.requirements == "Lead with revenue"

    @pytest.mark.asyncio
    async def test_gateway_prompt_carries_schema_contract(self, sample_plan_json):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=sample_plan_json)

        await _use_case(provider).execute("content", 3, provider="gateway", credentials="k")

        call = provider.plan_calls[0]
        assert call["response_model"] is None
        assert "RESPONSE FORMAT INSTRUCTIONS" in call["system_prompt"]
        assert "visualNote" in call["system_prompt"]

    @pytest.mark.asyncio
    async def test_managed_plan_uses_response_schema(self, sample_plan_json):
        provider = FakeProvider(ProviderId.MANAGED, plan_outcome=sample_plan_json)

        plan = await _use_case(provider).execute("content", 3, provider="managed", credentials="k")

        call = provider.plan_calls[0]
        assert call["response_model"] is PlanDraft
        assert "RESPONSE FORMAT INSTRUCTIONS" not in call["system_prompt"]
        assert plan.slide_count == 3

    @pytest.mark.asyncio
    async def test_fenced_and_unfenced_gateway_output_agree(self, sample_plan_json):
        """Test code fences around gateway JSON do not change the plan."""
        fenced = FakeProvider(
            ProviderId.GATEWAY, plan_outcome=f"Sure!\n```json\n{sample_plan_json}\n```"
        )
        plain = FakeProvider(ProviderId.GATEWAY, plan_outcome=sample_plan_json)

        fenced_plan = await _use_case(fenced).execute("c", 3, provider="gateway", credentials="k")
        plain_plan = await _use_case(plain).execute("c", 3, provider="gateway", credentials="k")

        assert fenced_plan == plain_plan

    @pytest.mark.asyncio
    async def test_source_text_is_truncated_with_urls(self, sample_plan_json):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=sample_plan_json)
        use_case = GeneratePlanUseCase(factory_for(provider), max_content_chars=100)

        await use_case.execute("x" * 1_000, 3, urls=["https://a.test"], provider="gateway", credentials="k")

        user_prompt = provider.plan_calls[0]["user_prompt"]
        assert "x" * 100 in user_prompt
        assert "x" * 101 not in user_prompt
        assert "https://a.test" not in user_prompt


class TestSlideCountRepair:
    @pytest.mark.asyncio
    async def test_short_plan_is_padded(self, sample_plan_payload):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=json.dumps(sample_plan_payload))

        plan = await _use_case(provider).execute("c", 5, provider="gateway", credentials="k")

        assert plan.slide_count == 5
        assert plan.has_unique_slide_ids()
        assert plan.slides[3].title == "Slide 4"
        assert plan.slides[4].visual_note == "Placeholder"

    @pytest.mark.asyncio
    async def test_long_plan_is_truncated(self, sample_plan_payload):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=json.dumps(sample_plan_payload))

        plan = await _use_case(provider).execute("c", 2, provider="gateway", credentials="k")

        assert [slide.title for slide in plan.slides] == ["Revenue Growth", "Margins"]

    @pytest.mark.asyncio
    async def test_duplicate_and_missing_ids_are_replaced(self):
        payload = {
            "topic": "T",
            "slides": [
                {"id": "dup", "title": "A", "bullets": ["a"], "visualNote": "v"},
                {"id": "dup", "title": "B", "bullets": ["b"], "visualNote": "v"},
                {"title": "C", "bullets": "single bullet", "visualNote": "v"},
            ],
        }
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=json.dumps(payload))

        plan = await _use_case(provider).execute("c", 3, provider="gateway", credentials="k")

        assert [slide.id for slide in plan.slides] == ["dup", "slide-1", "slide-2"]
        assert plan.slides[2].bullets == ["single bullet"]


class TestGeneratePlanFallback:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "outcome",
        [
            TransportError("500 Internal Server Error", status_code=500),
            "this is not json",
            json.dumps({"topic": "No slides here"}),
            json.dumps({"topic": "T", "slides": ["not an object"]}),
            "",
        ],
    )
    async def test_failures_yield_placeholder_plan(self, outcome):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=outcome)

        plan = await _use_case(provider).execute(
            "c", 4, provider="gateway", credentials="k", style="Retro"
        )

        assert plan.topic == "Generated Presentation"
        assert plan.slide_count == 4
        assert plan.style == "Retro"
        assert plan.slides[0].bullets == ["Content generation failed.", "Please edit manually."]

    @pytest.mark.asyncio
    async def test_missing_credentials_yield_localized_placeholder(self):
        """Test a configuration failure still reaches the editor."""
        factory = Mock(side_effect=ConfigurationError("An API key is required"))
        log = GenerationLog()

        plan = await GeneratePlanUseCase(factory).execute(
            "c", 2, output_language="zh", provider="managed", credentials=None, log_sink=log
        )

        assert plan.topic == "生成的演示文稿"
        assert plan.slide_count == 2
        assert log.entries[-1].type is LogEntryType.ERROR
        assert "An API key is required" in log.entries[-1].message

    @pytest.mark.asyncio
    async def test_error_log_never_contains_credential(self):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=TransportError("boom"))
        log = GenerationLog()

        await _use_case(provider).execute(
            "c", 1, provider="gateway", credentials="sk-secret-value", log_sink=log
        )

        rendered = " ".join(str(entry) for entry in log.entries)
        assert "sk-secret-value" not in rendered
        assert log.entries[-1].message == "boom"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slide_count", [0, 100])
    async def test_slide_count_out_of_range(self, slide_count):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome="{}")

        with pytest.raises(ValueError, match="between 1 and 99"):
            await _use_case(provider).execute("c", slide_count, provider="gateway")

        assert provider.plan_calls == []

    @pytest.mark.asyncio
    async def test_language_enum_and_string_are_equivalent(self, sample_plan_json):
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=sample_plan_json)

        await _use_case(provider).execute("c", 3, output_language=Language.ZH, provider="gateway")

        assert "Simplified Chinese" in provider.plan_calls[0]["system_prompt"]

    @pytest.mark.asyncio
    async def test_provider_context_is_dropped_after_planning(self, sample_plan_json):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id="req-1")
        provider = FakeProvider(ProviderId.GATEWAY, plan_outcome=TransportError("boom"))

        await _use_case(provider).execute("c", 2, provider="gateway", credentials="k")

        context = structlog.contextvars.get_contextvars()
        assert "provider" not in context
        assert context["request_id"] == "req-1"
        structlog.contextvars.clear_contextvars()
