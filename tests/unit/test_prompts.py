"""
Unit tests for plan and slide image prompt templates.
"""

from deckforge.application.prompts import (
    PlanDraft,
    PlanPrompts,
    SlideImagePrompts,
    compose_source_text,
)
from deckforge.domain.entities import SlideData
from deckforge.domain.value_objects import Language


class TestPlanPrompts:
    def test_system_prompt_states_slide_count(self):
        prompt = PlanPrompts.get_system_prompt(7, Language.EN)

        assert "exactly 7 slides" in prompt
        assert "You MUST generate the content in English." in prompt

    def test_empty_style_and_requirements_are_omitted(self):
        prompt = PlanPrompts.get_system_prompt(3, Language.EN, style="", requirements=None)

        assert "TARGET PRESENTATION STYLE" not in prompt
        assert "SPECIAL REQUIREMENTS" not in prompt

    def test_style_and_requirements_are_injected(self):
        prompt = PlanPrompts.get_system_prompt(
            3, Language.ZH, style="Hand-drawn", requirements="Focus on risks"
        )

        assert 'TARGET PRESENTATION STYLE: "Hand-drawn"' in prompt
        assert '"Focus on risks"' in prompt
        assert "Simplified Chinese" in prompt

    def test_user_prompt_carries_content(self):
        prompt = PlanPrompts.get_user_prompt("Quarterly numbers", 4, Language.ZH)

        assert "4 slides in Chinese" in prompt
        assert "Content:\nQuarterly numbers" in prompt
        assert prompt.endswith("(Content truncated to fit context if necessary)")

    def test_schema_contract_uses_wire_names(self):
        contract = PlanPrompts.get_schema_contract(Language.EN)

        assert "visualNote" in contract
        assert "visual_note" not in contract
        assert "valid JSON object" in contract

    def test_plan_draft_accepts_wire_names(self):
        draft = PlanDraft.model_validate(
            {"topic": "T", "slides": [{"id": "s1", "title": "A", "bullets": [], "visualNote": "v"}]}
        )

        assert draft.slides[0].visual_note == "v"


class TestComposeSourceText:
    def test_urls_are_hints(self):
        text = compose_source_text("Body", ["https://a.test", "https://b.test"], 10_000)

        assert text.startswith("Body")
        assert "https://a.test, https://b.test" in text

    def test_hard_ceiling(self):
        assert len(compose_source_text("x" * 600_000, [], 500_000)) == 500_000

    def test_ceiling_applies_after_urls(self):
        assert compose_source_text("abc", ["https://a.test"], 5) == "abc\n\n"


class TestSlideImagePrompts:
    def test_prompt_contains_slide_content(self):
        slide = SlideData(
            id="s1",
            title="Revenue Growth",
            bullets=["Up 18%.", "Subscriptions at 70%."],
            visual_note="Bar chart",
        )

        prompt = SlideImagePrompts.get_prompt(slide, "Minimal", 0)

        assert 'Slide Title: "Revenue Growth"' in prompt
        assert "Up 18%.; Subscriptions at 70%." in prompt
        assert 'Target Visual Style: "Minimal"' in prompt
        assert "Visual Description/Layout Hint: Bar chart" in prompt
        assert "16:9" in prompt

    def test_integration_instruction_by_image_count(self):
        assert "No user images provided" in SlideImagePrompts.get_image_integration_instruction(0)
        assert "1 specific image" in SlideImagePrompts.get_image_integration_instruction(1)
        assert "3 specific images" in SlideImagePrompts.get_image_integration_instruction(3)
