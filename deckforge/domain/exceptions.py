"""
Generation error taxonomy.

Every failure that crosses a provider boundary is translated into one of the
``GenerationError`` subclasses below, so callers switch on ``kind`` instead of
re-parsing provider messages.
"""

from enum import Enum
from typing import Iterable, Optional

# Text markers that mean "stop the whole batch, the caller must re-authenticate".
BATCH_ABORT_MARKERS = (
    "permission",
    "403",
    "The caller does not have permission",
    "quota",
)

# Text markers that make a failed primary image model eligible for the
# lower-tier fallback model. Matched case-insensitively.
MODEL_FALLBACK_MARKERS = ("permission", "403", "not found")

QUOTA_OR_PERMISSION_STATUSES = (401, 403, 429)
MODEL_FALLBACK_STATUSES = (403, 404)


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    SCHEMA = "schema"
    QUOTA_OR_PERMISSION = "quota_or_permission"
    CONTENT_MISSING = "content_missing"


class GenerationError(Exception):
    """Base class for provider-facing generation failures."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        provider: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.provider = provider
        super().__init__(message)


class ConfigurationError(GenerationError):
    """Raised when a credential is missing or the session must re-authenticate."""

    kind = ErrorKind.CONFIGURATION


class TransportError(GenerationError):
    """Raised when a provider cannot be reached or answers with an HTTP error."""

    kind = ErrorKind.TRANSPORT


class SchemaError(GenerationError):
    """Raised when a response is not JSON or lacks the required shape."""

    kind = ErrorKind.SCHEMA


class QuotaOrPermissionError(GenerationError):
    """Raised when a provider signals rate limiting or an authorization failure."""

    kind = ErrorKind.QUOTA_OR_PERMISSION


class ContentMissingError(GenerationError):
    """Raised when a response is well-formed but carries no image payload."""

    kind = ErrorKind.CONTENT_MISSING


def contains_marker(text: str, markers: Iterable[str], case_sensitive: bool = True) -> bool:
    if not case_sensitive:
        text = text.lower()
        return any(marker.lower() in text for marker in markers)
    return any(marker in text for marker in markers)


def is_quota_or_permission(message: str, status_code: Optional[int] = None) -> bool:
    """Classify a raw provider failure by status and batch-abort markers."""
    if status_code in QUOTA_OR_PERMISSION_STATUSES:
        return True
    return contains_marker(message, BATCH_ABORT_MARKERS)


def is_batch_fatal(error: BaseException) -> bool:
    """Business rule: only quota/permission failures stop a whole render batch."""
    if isinstance(error, GenerationError) and error.kind is ErrorKind.QUOTA_OR_PERMISSION:
        return True
    return contains_marker(str(error), BATCH_ABORT_MARKERS)


def is_model_fallback_eligible(error: BaseException) -> bool:
    """Business rule: permission or availability failures may retry on the fallback model."""
    if isinstance(error, GenerationError) and error.status_code in MODEL_FALLBACK_STATUSES:
        return True
    return contains_marker(str(error), MODEL_FALLBACK_MARKERS, case_sensitive=False)
