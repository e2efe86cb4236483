"""
In-memory generation session.

Holds everything one user works on: provider choice and credentials, the
aggregated sources, the editable plan, rendered slides and the generation
log. Nothing is persisted.
"""

from typing import Dict, List, Optional, Union

from deckforge.application.services.generation_log import GenerationLog
from deckforge.application.use_cases import (
    GeneratePlanUseCase,
    GenerationSessionController,
    RenderSlideUseCase,
)
from deckforge.application.use_cases.generate_plan import ProviderFactory
from deckforge.domain.entities import AggregatedContent, ImageAsset, PresentationPlan
from deckforge.domain.value_objects import Language, ProviderId
from deckforge.infra.config.logging_config import get_logger
from deckforge.infra.config.settings import Settings
from deckforge.infra.export import SlideArchive, build_slide_archive


class GenerationSession:
    def __init__(self, settings: Settings, provider_factory: ProviderFactory):
        self.settings = settings
        self.provider = ProviderId(settings.default_provider)
        self.credentials: Optional[str] = None
        self.output_language = Language.EN

        self.content = AggregatedContent()
        self.urls: List[str] = []
        self.plan: Optional[PresentationPlan] = None
        self.log = GenerationLog()

        self.plan_generator = GeneratePlanUseCase(
            provider_factory, max_content_chars=settings.max_content_chars
        )
        self.slide_renderer = RenderSlideUseCase(
            provider_factory,
            default_style=settings.default_slide_style,
            image_size=settings.image_size,
        )
        self.controller = GenerationSessionController(
            self.slide_renderer, self.provider, log_sink=self.log
        )
        self._log = get_logger("session")

    @property
    def assets(self) -> Dict[str, ImageAsset]:
        return {image.id: image for image in self.content.images}

    def configure(self, provider: Union[ProviderId, str], credentials: Optional[str]) -> None:
        self.provider = ProviderId(provider)
        self.credentials = credentials
        self.controller.update_credentials(credentials, self.provider)
        self._log.info("session.configured", provider=self.provider.value, has_key=bool(credentials))

    def add_sources(self, content: AggregatedContent, urls: Optional[List[str]] = None) -> None:
        self.content = self.content.merge(content)
        for url in urls or []:
            if url not in self.urls:
                self.urls.append(url)

    async def create_plan(
        self,
        slide_count: int,
        output_language: Union[Language, str] = Language.EN,
        style: Optional[str] = None,
        requirements: Optional[str] = None,
    ) -> PresentationPlan:
        """Generate a fresh plan, discarding every rendered slide.

        Raises:
            ValueError: If a render batch is still running
        """
        self.controller.ensure_not_running()
        self.output_language = Language(output_language)
        plan = await self.plan_generator.execute(
            self.content.text,
            slide_count,
            urls=self.urls,
            output_language=self.output_language,
            style=style,
            requirements=requirements,
            provider=self.provider,
            credentials=self.credentials,
            log_sink=self.log,
        )
        self.controller.reset(plan.slide_count)
        self.controller.language = self.output_language
        self.plan = plan
        return plan

    def require_plan(self) -> PresentationPlan:
        if self.plan is None:
            raise ValueError("No plan has been generated yet")
        return self.plan

    def update_plan(self, edited: PresentationPlan) -> PresentationPlan:
        self.require_plan().validate_edit(edited)
        self.plan = edited
        return edited

    async def render_all(self) -> List[Optional[str]]:
        return await self.controller.run(self.require_plan(), self.assets)

    async def render_slide(self, index: int) -> str:
        return await self.controller.regenerate(self.require_plan(), index, self.assets)

    def build_archive(self) -> Optional[SlideArchive]:
        return build_slide_archive(self.require_plan().topic, self.controller.results)

    def export_logs(self) -> str:
        return self.log.export_text()
