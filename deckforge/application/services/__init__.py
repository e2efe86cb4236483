"""Application services."""

from .generation_log import GenerationLog
from .session import GenerationSession

__all__ = ["GenerationLog", "GenerationSession"]
