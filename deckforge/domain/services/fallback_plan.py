"""
Deterministic placeholder plan used whenever plan generation fails.
"""

from typing import Optional

from deckforge.domain.entities import PresentationPlan, SlideData
from deckforge.domain.value_objects import Language

PLACEHOLDER_VISUAL_NOTE = "Placeholder"

_FALLBACK_TEXT = {
    Language.EN: {
        "topic": "Generated Presentation",
        "slide": "Slide",
        "bullets": ["Content generation failed.", "Please edit manually."],
    },
    Language.ZH: {
        "topic": "生成的演示文稿",
        "slide": "幻灯片",
        "bullets": ["内容生成失败。", "请手动编辑。"],
    },
}


def build_placeholder_slide(index: int, language: Language) -> SlideData:
    """Placeholder slide for position ``index`` (0-based)."""
    text = _FALLBACK_TEXT[language]
    return SlideData(
        id=f"slide-{index}",
        title=f"{text['slide']} {index + 1}",
        bullets=list(text["bullets"]),
        visual_note=PLACEHOLDER_VISUAL_NOTE,
        selected_image_ids=[],
    )


def build_fallback_plan(
    slide_count: int, language: Language, style: Optional[str] = None
) -> PresentationPlan:
    """
    Build the localized placeholder plan.

    Args:
        slide_count: Number of slides requested by the user
        language: Output language of the placeholder text
        style: User style input, preserved even on failure

    Returns:
        PresentationPlan with exactly ``slide_count`` placeholder slides
    """
    return PresentationPlan(
        topic=_FALLBACK_TEXT[language]["topic"],
        style=style,
        slides=[build_placeholder_slide(i, language) for i in range(slide_count)],
    )


def fallback_topic(language: Language) -> str:
    return _FALLBACK_TEXT[language]["topic"]
