"""Source content aggregation."""

from .aggregator import ContentAggregator, SourceFile

__all__ = ["ContentAggregator", "SourceFile"]
