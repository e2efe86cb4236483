"""
Presentation plan domain entities with core business rules.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SlideData:
    id: str
    title: str
    bullets: List[str]
    visual_note: str
    selected_image_ids: List[str] = field(default_factory=list)

    def select_image(self, image_id: str) -> None:
        """Business rule: image selections behave like an ordered set."""
        if image_id not in self.selected_image_ids:
            self.selected_image_ids.append(image_id)

    def deselect_image(self, image_id: str) -> None:
        if image_id in self.selected_image_ids:
            self.selected_image_ids.remove(image_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "bullets": list(self.bullets),
            "visualNote": self.visual_note,
            "selectedImageIds": list(self.selected_image_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideData":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            bullets=[str(b) for b in data.get("bullets") or []],
            visual_note=str(data.get("visualNote") or ""),
            selected_image_ids=list(dict.fromkeys(data.get("selectedImageIds") or [])),
        )


@dataclass
class PresentationPlan:
    topic: str
    slides: List[SlideData]
    style: Optional[str] = None
    requirements: Optional[str] = None

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    def has_unique_slide_ids(self) -> bool:
        """Business rule: slide ids are unique within a plan."""
        ids = [slide.id for slide in self.slides]
        return len(ids) == len(set(ids))

    def validate_edit(self, edited: "PresentationPlan") -> None:
        """
        Business rule: an edited plan keeps its slide count and unique ids.

        Args:
            edited: The plan proposed by the editor

        Raises:
            ValueError: If the edit breaks a plan invariant
        """
        if edited.slide_count != self.slide_count:
            raise ValueError(
                f"Slide count cannot change from {self.slide_count} to {edited.slide_count}"
            )
        if not edited.has_unique_slide_ids():
            raise ValueError("Slide ids must be unique within a plan")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "style": self.style,
            "requirements": self.requirements,
            "slides": [slide.to_dict() for slide in self.slides],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PresentationPlan":
        return cls(
            topic=str(data.get("topic", "")),
            style=data.get("style"),
            requirements=data.get("requirements"),
            slides=[SlideData.from_dict(s) for s in data.get("slides") or []],
        )
