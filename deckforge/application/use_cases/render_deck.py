"""
Use Case: Render Deck (generation session controller)

Drives image generation for a whole plan, one slide at a time and in order.
Already rendered slides are never regenerated by a batch run. A per-slide
failure leaves that slide empty and the batch moves on, except for quota,
permission and credential failures, which abort the batch and lock the
controller until new credentials are supplied.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from deckforge.application.ports import LogSink, emit
from deckforge.application.use_cases.render_slide import RenderSlideUseCase
from deckforge.domain.entities import GenerationLogEntry, ImageAsset, PresentationPlan, SlideData
from deckforge.domain.exceptions import ConfigurationError, is_batch_fatal
from deckforge.domain.value_objects import BatchStatus, Language, LogEntryType, ProviderId
from deckforge.infra.config.logging_config import bind_context, get_logger, unbind_context

ABORT_NOTICES = {
    Language.EN: "Permission denied or quota exceeded.",
    Language.ZH: "API 权限不足或配额已满。",
}
CREDENTIAL_NOTICES = {
    Language.EN: "Please configure a valid API key.",
    Language.ZH: "请配置有效的 API 密钥。",
}


@dataclass
class BatchProgress:
    """Read-only projection of controller state for progress displays."""

    status: BatchStatus
    current_index: Optional[int]
    total: int
    rendered: int
    failed: List[int] = field(default_factory=list)
    notice: Optional[str] = None
    requires_reauth: bool = False


def resolve_reference_images(
    slide: SlideData, assets: Mapping[str, ImageAsset]
) -> List[str]:
    """Data URIs for a slide's selected images; unknown ids are skipped."""
    return [
        assets[image_id].data_url
        for image_id in slide.selected_image_ids
        if image_id in assets
    ]


class GenerationSessionController:
    def __init__(
        self,
        render_slide: RenderSlideUseCase,
        provider: Union[ProviderId, str] = ProviderId.MANAGED,
        credentials: Optional[str] = None,
        language: Language = Language.EN,
        log_sink: Optional[LogSink] = None,
    ):
        self.render_slide = render_slide
        self.provider = ProviderId(provider)
        self.credentials = credentials
        self.language = language
        self.log_sink = log_sink

        self.status = BatchStatus.IDLE
        self.current_index: Optional[int] = None
        self.results: List[Optional[str]] = []
        self.failures: Dict[int, str] = {}
        self.notice: Optional[str] = None
        self.requires_reauth = False
        self._log = get_logger("usecase.render_deck")

    @property
    def progress(self) -> BatchProgress:
        return BatchProgress(
            status=self.status,
            current_index=self.current_index,
            total=len(self.results),
            rendered=sum(1 for image in self.results if image),
            failed=sorted(self.failures),
            notice=self.notice,
            requires_reauth=self.requires_reauth,
        )

    def update_credentials(
        self, credentials: Optional[str], provider: Union[ProviderId, str, None] = None
    ) -> None:
        """Accept new credentials and lift a quota/permission lock."""
        self.credentials = credentials
        if provider is not None:
            self.provider = ProviderId(provider)
        self.requires_reauth = False
        self.notice = None

    def reset(self, slide_count: int) -> None:
        """Forget all results; called when a brand-new plan is generated."""
        self.ensure_not_running()
        self.results = [None] * slide_count
        self.failures = {}
        self.current_index = None
        self.status = BatchStatus.IDLE

    async def run(
        self, plan: PresentationPlan, assets: Mapping[str, ImageAsset]
    ) -> List[Optional[str]]:
        """
        Render every slide that has no image yet.

        Args:
            plan: The edited plan to render
            assets: Externally owned image collection, read only

        Returns:
            Per-slide data URIs; ``None`` where a slide has no image

        Raises:
            ConfigurationError: If no API key is set or re-authentication is pending
            ValueError: If a batch is already running
        """
        self.ensure_ready()
        self._sync_results(plan)
        self._transition(BatchStatus.RUNNING)
        self._log.info("batch.start", total=plan.slide_count, pending=self.results.count(None))

        for index, slide in enumerate(plan.slides):
            if self.results[index]:
                continue

            self.current_index = index
            try:
                self.results[index] = await self._render(slide, plan, assets)
                self.failures.pop(index, None)
            except Exception as e:
                if self._record_failure(index, e):
                    self.current_index = None
                    self._transition(BatchStatus.ABORTED)
                    return list(self.results)

        self.current_index = None
        self._transition(BatchStatus.COMPLETED)
        self._log.info(
            "batch.completed",
            rendered=self.progress.rendered,
            failed=len(self.failures),
        )
        return list(self.results)

    async def regenerate(
        self, plan: PresentationPlan, index: int, assets: Mapping[str, ImageAsset]
    ) -> str:
        """Re-render one slide on demand, replacing any previous image."""
        self.ensure_ready()
        if not 0 <= index < plan.slide_count:
            raise IndexError(f"Slide index {index} out of range")
        self._sync_results(plan)

        self.current_index = index
        try:
            image = await self._render(plan.slides[index], plan, assets)
        except Exception as e:
            self._record_failure(index, e)
            raise
        finally:
            self.current_index = None

        self.results[index] = image
        self.failures.pop(index, None)
        return image

    async def _render(
        self,
        slide: SlideData,
        plan: PresentationPlan,
        assets: Mapping[str, ImageAsset],
    ) -> str:
        bind_context(slide_id=slide.id)
        try:
            return await self.render_slide.execute(
                slide,
                plan.style or "",
                resolve_reference_images(slide, assets),
                self.provider,
                self.credentials,
                log_sink=self.log_sink,
            )
        finally:
            unbind_context("slide_id")

    def _record_failure(self, index: int, error: Exception) -> bool:
        """Record a slide failure; returns True when the batch must stop."""
        self.failures[index] = str(error)
        emit(
            self.log_sink,
            GenerationLogEntry(
                type=LogEntryType.ERROR,
                message=f"Error generating slide {index + 1}: {error}",
            ),
        )

        if isinstance(error, ConfigurationError):
            self.requires_reauth = True
            self.notice = CREDENTIAL_NOTICES[self.language]
            self._log.warning("batch.abort", slide_index=index, error=str(error))
            return True

        if is_batch_fatal(error):
            self.requires_reauth = True
            self.notice = ABORT_NOTICES[self.language]
            self._log.warning("batch.abort", slide_index=index, error=str(error))
            return True

        self._log.warning("slide.render.failed", slide_index=index, error=str(error))
        return False

    def _sync_results(self, plan: PresentationPlan) -> None:
        if len(self.results) != plan.slide_count:
            self.reset(plan.slide_count)

    def ensure_ready(self) -> None:
        """Raise unless a new run may start now."""
        if self.requires_reauth:
            raise ConfigurationError(
                "Re-authentication required before generating again",
                provider=self.provider.value,
            )
        if not self.credentials or not self.credentials.strip():
            raise ConfigurationError(
                f"An API key is required for the {self.provider.value} provider",
                provider=self.provider.value,
            )
        self.ensure_not_running()

    def ensure_not_running(self) -> None:
        """Raise ValueError while a batch is in flight."""
        if self.status is BatchStatus.RUNNING:
            raise ValueError("A render batch is already running")

    def _transition(self, new_status: BatchStatus) -> None:
        if not self.status.can_transition_to(new_status):
            raise ValueError(
                f"Cannot move render batch from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
