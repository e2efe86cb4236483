"""Prompt templates and structured output models."""

from .plan_generation import PlanDraft, PlanPrompts, SlideDraft, compose_source_text
from .slide_image import SlideImagePrompts

__all__ = [
    "PlanDraft",
    "PlanPrompts",
    "SlideDraft",
    "SlideImagePrompts",
    "compose_source_text",
]
