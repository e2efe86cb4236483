"""
Aggregated source content produced from uploaded files.
"""

from dataclasses import dataclass, field
from typing import List

from deckforge.domain.entities.asset import ImageAsset


@dataclass
class AggregatedContent:
    text: str = ""
    images: List[ImageAsset] = field(default_factory=list)

    def merge(self, other: "AggregatedContent") -> "AggregatedContent":
        return AggregatedContent(text=self.text + other.text, images=self.images + other.images)
