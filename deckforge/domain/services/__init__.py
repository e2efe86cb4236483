"""Domain services."""

from .fallback_plan import build_fallback_plan, build_placeholder_slide, fallback_topic

__all__ = ["build_fallback_plan", "build_placeholder_slide", "fallback_topic"]
