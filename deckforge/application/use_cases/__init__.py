"""Application use cases."""

from .generate_plan import GeneratePlanUseCase
from .render_deck import BatchProgress, GenerationSessionController, resolve_reference_images
from .render_slide import RenderSlideUseCase

__all__ = [
    "BatchProgress",
    "GeneratePlanUseCase",
    "GenerationSessionController",
    "RenderSlideUseCase",
    "resolve_reference_images",
]
