"""
Plan generation prompts and structured output models.

Contains the prompts and Pydantic models used to turn aggregated source
content into a presentation plan.
"""

import json
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from deckforge.domain.value_objects import Language


# ---------- STRUCTURED OUTPUT MODELS ----------
class SlideDraft(BaseModel):
    """Structured draft of a single slide as returned by the model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique ID for the slide, e.g., 'slide-1'")
    title: str = Field(..., description="Slide headline")
    bullets: List[str] = Field(..., description="Detailed key points for the slide")
    visual_note: str = Field(
        ...,
        alias="visualNote",
        description="Detailed description of the ideal image/graphic for this slide",
    )


class PlanDraft(BaseModel):
    """Structured plan for a complete presentation deck."""

    topic: str = Field(..., description="The main topic/title of the presentation")
    slides: List[SlideDraft] = Field(..., description="Ordered slide drafts")


# ---------- PROMPT TEMPLATES ----------
class PlanPrompts:
    """Centralized prompt templates for plan generation."""

    @staticmethod
    def get_system_prompt(
        slide_count: int,
        language: Language,
        style: Optional[str] = None,
        requirements: Optional[str] = None,
    ) -> str:
        """System prompt for plan generation."""
        sections = [
            "You are an elite Research Analyst and Senior Presentation Strategist.\n"
            "Your goal is to conduct a deep-dive analysis of the provided source materials "
            "and synthesize a comprehensive, high-density presentation plan.",
            f"The user wants exactly {slide_count} slides.",
        ]

        if requirements:
            sections.append(
                f'USER\'S SPECIAL REQUIREMENTS FOR ANALYSIS & STRUCTURE: "{requirements}"\n'
                "(Please STRICTLY follow these requirements when analyzing the content "
                "and structuring the slides.)"
            )

        if style:
            sections.append(
                f'TARGET PRESENTATION STYLE: "{style}"\n'
                "(Keep this style in mind when writing the visual notes.)"
            )

        sections.append(
            """CRITICAL REQUIREMENTS FOR CONTENT QUALITY:
1. **Deep & Insightful**: Do not just summarize. Extract specific data points, quotes, nuances, and key arguments.
2. **Rich & Detailed**: Each bullet point should be a full, substantial sentence that conveys specific information, reasoning, or evidence.
3. **Structured Narrative**: Organize the slides logically to tell a cohesive story.
4. **Visual Strategy**: The 'visualNote' must be descriptive and specific enough for a designer to create the exact slide visual (e.g., "A split-screen comparison showing the old process vs. the new automated workflow", not just "Comparison")."""
        )
        sections.append(PlanPrompts.get_language_instruction(language))
        return "\n\n".join(sections)

    @staticmethod
    def get_language_instruction(language: Language) -> str:
        if language is Language.ZH:
            return (
                "You MUST generate the content in Simplified Chinese (简体中文). "
                "Translate source content if necessary."
            )
        return "You MUST generate the content in English."

    @staticmethod
    def get_user_prompt(content: str, slide_count: int, language: Language) -> str:
        """User prompt carrying the (already truncated) source content."""
        return (
            f"Analyze the following content and create a professional presentation plan "
            f"with {slide_count} slides in {language.display_name}.\n\n"
            "Ensure the content is rich, detailed, and directly derived from the source material.\n\n"
            f"Content:\n{content}\n"
            "(Content truncated to fit context if necessary)"
        )

    @staticmethod
    def get_schema_contract(language: Language) -> str:
        """Textual schema contract for providers without server-side schemas."""
        schema = json.dumps(PlanDraft.model_json_schema(by_alias=True), indent=2)
        return (
            "RESPONSE FORMAT INSTRUCTIONS:\n"
            "You MUST respond with a valid JSON object (not wrapped in prose) strictly "
            f"following this schema. All text values must be in {language.display_name}.\n"
            f"{schema}"
        )


def compose_source_text(content: str, urls: List[str], max_chars: int) -> str:
    """
    Combine source text with URL hints and apply the hard length ceiling.

    URLs are never fetched; they are passed to the model as hints only.
    """
    combined = content or ""
    if urls:
        combined += (
            "\n\nAlso consider information from these URLs if you can access general "
            f"knowledge about them (if not, ignore): {', '.join(urls)}"
        )
    return combined[:max_chars]
