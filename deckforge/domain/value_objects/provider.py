"""
Provider and language value objects.
"""

from enum import Enum


class ProviderId(str, Enum):
    """Backend that serves plan and image generation."""

    MANAGED = "managed"  # Vendor SDK with machine-checked response schemas
    GATEWAY = "gateway"  # OpenAI-compatible HTTP gateway

    def supports_response_schema(self) -> bool:
        """Business rule: only the managed SDK enforces a JSON schema server-side."""
        return self is ProviderId.MANAGED


class Language(str, Enum):
    """Output language for generated content."""

    EN = "en"
    ZH = "zh"

    @property
    def display_name(self) -> str:
        return "Chinese" if self is Language.ZH else "English"
