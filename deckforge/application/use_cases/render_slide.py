"""
Use Case: Render Slide Image

Renders one planned slide (plus optional reference images) into a finished
16:9 slide image. Failures propagate to the caller; a primary-model failure
that looks like a permission or availability problem is retried exactly once
on the provider's lower-tier fallback model.
"""

from typing import Callable, Optional, Sequence, Union

from deckforge.application.ports import LogSink, ProviderPort, emit
from deckforge.application.prompts import SlideImagePrompts
from deckforge.domain.entities import GenerationLogEntry, InlineImage, SlideData, to_data_uri
from deckforge.domain.exceptions import ContentMissingError, is_model_fallback_eligible
from deckforge.domain.value_objects import LogEntryType, ProviderId
from deckforge.infra.config.logging_config import get_logger

ProviderFactory = Callable[[ProviderId, Optional[str]], ProviderPort]

DEFAULT_SLIDE_STYLE = "Modern, Corporate, High-Definition"


class RenderSlideUseCase:
    def __init__(
        self,
        provider_factory: ProviderFactory,
        default_style: str = DEFAULT_SLIDE_STYLE,
        image_size: str = "4K",
    ):
        self.provider_factory = provider_factory
        self.default_style = default_style
        self.image_size = image_size
        self._log = get_logger("usecase.render_slide")

    async def execute(
        self,
        slide: SlideData,
        style: Optional[str],
        reference_images: Sequence[str],
        provider: Union[ProviderId, str],
        credentials: Optional[str],
        log_sink: Optional[LogSink] = None,
    ) -> str:
        """
        Render a slide image.

        Args:
            slide: The slide to render
            style: Deck style; the default style is used when empty
            reference_images: Resolved image data URIs, in selection order
            provider: "managed" or "gateway"
            credentials: API key for the provider
            log_sink: Optional session log

        Returns:
            ``data:image/png;base64,...`` URI of the rendered slide

        Raises:
            GenerationError: If neither model produced an image. The primary
                error is raised when the fallback model returns no image.
        """
        provider_client = self.provider_factory(ProviderId(provider), credentials)
        images = [InlineImage.from_data_uri(uri) for uri in reference_images]
        prompt = SlideImagePrompts.get_prompt(slide, style or self.default_style, len(images))

        log = self._log.bind(slide_id=slide.id)
        log.info(
            "usecase.start",
            action="render_slide",
            model=provider_client.image_model,
            reference_images=len(images),
        )

        try:
            payload = await provider_client.generate_image(
                prompt,
                images,
                provider_client.image_model,
                image_size=self.image_size,
                log_sink=log_sink,
            )
        except Exception as primary_error:
            emit(
                log_sink,
                GenerationLogEntry(
                    type=LogEntryType.ERROR,
                    message=f"Primary model failed: {primary_error}",
                ),
            )
            if not is_model_fallback_eligible(primary_error):
                log.warning("slide.render.failed", error=str(primary_error))
                raise

            log.warning(
                "slide.render.fallback",
                error=str(primary_error),
                fallback_model=provider_client.fallback_image_model,
            )
            try:
                # Fallback requests carry the aspect ratio only, no explicit size
                payload = await provider_client.generate_image(
                    prompt,
                    images,
                    provider_client.fallback_image_model,
                    image_size=None,
                    log_sink=log_sink,
                )
            except ContentMissingError as fallback_error:
                # No image from the fallback model: the primary failure is reported
                self._record_fallback_failure(log, log_sink, fallback_error)
                raise primary_error from fallback_error
            except Exception as fallback_error:
                self._record_fallback_failure(log, log_sink, fallback_error)
                raise

        log.info("usecase.success", action="render_slide")
        return to_data_uri(payload, "image/png")

    def _record_fallback_failure(
        self, log, log_sink: Optional[LogSink], fallback_error: Exception
    ) -> None:
        emit(
            log_sink,
            GenerationLogEntry(
                type=LogEntryType.ERROR,
                message=f"Fallback failed: {fallback_error}",
            ),
        )
        log.warning("slide.render.fallback_failed", error=str(fallback_error))
