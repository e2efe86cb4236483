"""
Unit tests for the deterministic placeholder plan.
"""

import pytest

from deckforge.domain.services import build_fallback_plan, build_placeholder_slide
from deckforge.domain.value_objects import Language


class TestFallbackPlan:
    @pytest.mark.parametrize("slide_count", [1, 2, 7, 99])
    @pytest.mark.parametrize("language", [Language.EN, Language.ZH])
    def test_has_exact_count_and_unique_ids(self, slide_count, language):
        plan = build_fallback_plan(slide_count, language)

        assert plan.slide_count == slide_count
        assert plan.has_unique_slide_ids()
        assert all(slide.selected_image_ids == [] for slide in plan.slides)

    def test_english_text(self):
        plan = build_fallback_plan(2, Language.EN, style="Dark neon")

        assert plan.topic == "Generated Presentation"
        assert plan.style == "Dark neon"
        assert [slide.title for slide in plan.slides] == ["Slide 1", "Slide 2"]
        assert plan.slides[0].bullets == ["Content generation failed.", "Please edit manually."]
        assert plan.slides[0].visual_note == "Placeholder"

    def test_chinese_text(self):
        plan = build_fallback_plan(1, Language.ZH)

        assert plan.topic == "生成的演示文稿"
        assert plan.slides[0].title == "幻灯片 1"
        assert plan.slides[0].bullets == ["内容生成失败。", "请手动编辑。"]

    def test_placeholder_slides_are_independent(self):
        """Test editing one placeholder does not leak into another."""
        first = build_placeholder_slide(0, Language.EN)
        second = build_placeholder_slide(1, Language.EN)

        first.bullets.append("edited")

        assert second.bullets == ["Content generation failed.", "Please edit manually."]
        assert first.id == "slide-0"
        assert second.id == "slide-1"
