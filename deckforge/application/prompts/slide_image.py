"""
Slide image prompts.
"""

from deckforge.domain.entities import SlideData


class SlideImagePrompts:
    """Prompt template for rendering one finished slide as an image."""

    @staticmethod
    def get_image_integration_instruction(image_count: int) -> str:
        if image_count == 0:
            return (
                "No user images provided. Generate a custom illustration/graphic based on "
                "the Visual Description."
            )
        if image_count == 1:
            return (
                "I have provided 1 specific image for this slide. Integrate the single provided "
                "image seamlessly (e.g., as a hero image, full background with overlay, or split "
                "layout). The provided image must be clearly displayed in the page layout."
            )
        return (
            f"I have provided {image_count} specific images for this slide. Arrange the provided "
            "images artistically (e.g., a neat grid, a collage, or distributed across the layout). "
            "Ensure they balance well with the text. All provided images must be clearly "
            "displayed in the page layout."
        )

    @staticmethod
    def get_prompt(slide: SlideData, style: str, image_count: int) -> str:
        bullets = "; ".join(slide.bullets)
        integration = SlideImagePrompts.get_image_integration_instruction(image_count)
        return f"""Design a professional, high-end presentation slide (16:9 Aspect Ratio).

STRICT CONTENT REQUIREMENTS (DO NOT HALLUCINATE TEXT):
- Slide Title: "{slide.title}"
- Key Points to Display: {bullets}

DESIGN & VISUAL REQUIREMENTS:
- Target Visual Style: "{style}"
- Visual Description/Layout Hint: {slide.visual_note}

Design Guidelines:
1. **Layout**: Create a balanced, aesthetically pleasing composition. Do not simply list text. Use modern layout techniques (split screen, card overlay, typographic focus).
2. **Style Adherence**: You MUST strictly adhere to the "Target Visual Style" defined above.
3. **Text Rendering**: Render the TITLE clearly. Render the Key Points legibly if they fit; if there is too much text, summarize it visually or use distinct headers.
4. **Image Integration**: {integration}
   IMPORTANT: If provided, the user images MUST be visible in the final design.

Output: A single high-quality presentation slide image."""
