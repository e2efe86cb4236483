"""
Use Case: Generate Presentation Plan

Turns aggregated source content into a structured presentation plan through
the selected provider. This use case never raises for provider or parsing
failures: any such failure yields the deterministic placeholder plan, so the
user always reaches the editor with something to work on.
"""

from typing import Any, Callable, Dict, List, Optional, Set, Union

from deckforge.application.ports import LogSink, ProviderPort, emit
from deckforge.application.prompts import PlanDraft, PlanPrompts, compose_source_text
from deckforge.domain.entities import GenerationLogEntry, PresentationPlan, SlideData
from deckforge.domain.exceptions import SchemaError
from deckforge.domain.services import (
    build_fallback_plan,
    build_placeholder_slide,
    fallback_topic,
)
from deckforge.domain.value_objects import Language, LogEntryType, ProviderId
from deckforge.infra.config.logging_config import bind_context, get_logger, unbind_context
from deckforge.infra.llm.response_parsing import parse_json_object, strip_code_fence

ProviderFactory = Callable[[ProviderId, Optional[str]], ProviderPort]

MIN_SLIDE_COUNT = 1
MAX_SLIDE_COUNT = 99


class GeneratePlanUseCase:
    """Plan generation with schema-constrained output and placeholder fallback."""

    def __init__(
        self,
        provider_factory: ProviderFactory,
        max_content_chars: int = 500_000,
    ):
        self.provider_factory = provider_factory
        self.max_content_chars = max_content_chars
        self._log = get_logger("usecase.generate_plan")

    async def execute(
        self,
        content: str,
        slide_count: int,
        urls: Optional[List[str]] = None,
        output_language: Union[Language, str] = Language.EN,
        style: Optional[str] = None,
        requirements: Optional[str] = None,
        provider: Union[ProviderId, str] = ProviderId.MANAGED,
        credentials: Optional[str] = None,
        log_sink: Optional[LogSink] = None,
    ) -> PresentationPlan:
        """
        Execute plan generation.

        Args:
            content: Aggregated text of all uploaded documents
            slide_count: Exact number of slides wanted (1-99)
            urls: URLs passed to the model as text hints (never fetched)
            output_language: "en" or "zh"
            style: Free-text visual style, reused for every slide image
            requirements: Free-text structural constraints for planning
            provider: "managed" or "gateway"
            credentials: API key for the provider
            log_sink: Optional session log receiving request/response/error entries

        Returns:
            A well-formed plan with exactly ``slide_count`` slides

        Raises:
            ValueError: If ``slide_count`` is outside 1-99
        """
        if not MIN_SLIDE_COUNT <= slide_count <= MAX_SLIDE_COUNT:
            raise ValueError(
                f"Slide count must be between {MIN_SLIDE_COUNT} and {MAX_SLIDE_COUNT}"
            )

        language = Language(output_language)
        provider_id = ProviderId(provider)
        bind_context(provider=provider_id.value)
        try:
            return await self._generate(
                content,
                slide_count,
                urls or [],
                language,
                style,
                requirements,
                provider_id,
                credentials,
                log_sink,
            )
        finally:
            unbind_context("provider")

    async def _generate(
        self,
        content: str,
        slide_count: int,
        urls: List[str],
        language: Language,
        style: Optional[str],
        requirements: Optional[str],
        provider_id: ProviderId,
        credentials: Optional[str],
        log_sink: Optional[LogSink],
    ) -> PresentationPlan:
        self._log.info(
            "usecase.start",
            action="generate_plan",
            slide_count=slide_count,
            content_len=len(content or ""),
            url_count=len(urls),
        )

        try:
            provider_client = self.provider_factory(provider_id, credentials)
            raw = await self._request_plan(
                provider_client,
                content,
                slide_count,
                urls,
                language,
                style,
                requirements,
                log_sink,
            )
            plan = self._build_plan(
                raw, provider_client, slide_count, language, style, requirements
            )
        except Exception as e:
            self._log.warning(
                "plan.generate.fallback",
                error=str(e),
                kind=getattr(getattr(e, "kind", None), "value", type(e).__name__),
            )
            emit(log_sink, GenerationLogEntry(type=LogEntryType.ERROR, message=str(e)))
            return build_fallback_plan(slide_count, language, style)

        self._log.info("usecase.success", topic=plan.topic, slides=plan.slide_count)
        return plan

    async def _request_plan(
        self,
        provider_client: ProviderPort,
        content: str,
        slide_count: int,
        urls: List[str],
        language: Language,
        style: Optional[str],
        requirements: Optional[str],
        log_sink: Optional[LogSink],
    ) -> str:
        source_text = compose_source_text(content, urls, self.max_content_chars)
        system_prompt = PlanPrompts.get_system_prompt(
            slide_count, language, style=style, requirements=requirements
        )
        user_prompt = PlanPrompts.get_user_prompt(source_text, slide_count, language)

        if provider_client.supports_response_schema:
            return await provider_client.generate_plan(
                system_prompt, user_prompt, response_model=PlanDraft, log_sink=log_sink
            )

        # No server-side schema: the contract travels in the prompt instead
        system_prompt = f"{system_prompt}\n\n{PlanPrompts.get_schema_contract(language)}"
        return await provider_client.generate_plan(
            system_prompt, user_prompt, log_sink=log_sink
        )

    def _build_plan(
        self,
        raw: str,
        provider_client: ProviderPort,
        slide_count: int,
        language: Language,
        style: Optional[str],
        requirements: Optional[str],
    ) -> PresentationPlan:
        provider = provider_client.provider_id.value
        text = raw if provider_client.supports_response_schema else strip_code_fence(raw)
        data = parse_json_object(text, provider=provider)

        slides_data = data.get("slides")
        if not isinstance(slides_data, list):
            raise SchemaError("Response JSON has no slides array", provider=provider)

        if len(slides_data) != slide_count:
            self._log.warning(
                "plan.slide_count.mismatch", requested=slide_count, returned=len(slides_data)
            )

        return PresentationPlan(
            topic=str(data.get("topic") or fallback_topic(language)),
            style=style,
            requirements=requirements,
            slides=self._repair_slides(slides_data, slide_count, language, provider),
        )

    def _repair_slides(
        self,
        slides_data: List[Any],
        slide_count: int,
        language: Language,
        provider: str,
    ) -> List[SlideData]:
        """Coerce model slides into exactly ``slide_count`` well-formed slides."""
        slides: List[SlideData] = []
        seen: Set[str] = set()

        for index, item in enumerate(slides_data[:slide_count]):
            if not isinstance(item, dict):
                raise SchemaError(f"Slide {index + 1} is not an object", provider=provider)
            slides.append(self._slide_from_dict(item, index, seen))

        # Surplus slides were dropped above; pad a short plan with placeholders
        for index in range(len(slides), slide_count):
            placeholder = build_placeholder_slide(index, language)
            placeholder.id = _unique_id(placeholder.id, index, seen)
            slides.append(placeholder)

        return slides

    def _slide_from_dict(self, item: Dict[str, Any], index: int, seen: Set[str]) -> SlideData:
        bullets = item.get("bullets") or []
        if not isinstance(bullets, list):
            bullets = [bullets]

        return SlideData(
            id=_unique_id(str(item.get("id") or "").strip(), index, seen),
            title=str(item.get("title") or ""),
            bullets=[str(bullet) for bullet in bullets],
            visual_note=str(item.get("visualNote") or ""),
            # Selections belong to the editor, never to the model
            selected_image_ids=[],
        )


def _unique_id(candidate: str, index: int, seen: Set[str]) -> str:
    slide_id = candidate if candidate and candidate not in seen else f"slide-{index}"
    suffix = 1
    while slide_id in seen:
        slide_id = f"slide-{index}-{suffix}"
        suffix += 1
    seen.add(slide_id)
    return slide_id
