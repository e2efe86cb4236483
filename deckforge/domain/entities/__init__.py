"""Domain entities."""

from .asset import ImageAsset, InlineImage, split_data_uri, to_data_uri
from .content import AggregatedContent
from .generation_log import GenerationLogEntry
from .plan import PresentationPlan, SlideData

__all__ = [
    "AggregatedContent",
    "GenerationLogEntry",
    "ImageAsset",
    "InlineImage",
    "PresentationPlan",
    "SlideData",
    "split_data_uri",
    "to_data_uri",
]
