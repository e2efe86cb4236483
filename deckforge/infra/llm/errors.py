"""
Translation of client-library exceptions into the generation error taxonomy.

This is the single place where provider failures are classified.
"""

from typing import Optional

import httpx
import openai
from google.genai import errors as genai_errors

from deckforge.domain.exceptions import (
    GenerationError,
    QuotaOrPermissionError,
    SchemaError,
    TransportError,
    is_quota_or_permission,
)


def classify_http_failure(
    message: str, status_code: Optional[int], provider: Optional[str] = None
) -> GenerationError:
    """Build the error for an HTTP-level failure with an optional status."""
    if is_quota_or_permission(message, status_code):
        return QuotaOrPermissionError(message, status_code=status_code, provider=provider)
    return TransportError(message, status_code=status_code, provider=provider)


def translate_error(exc: BaseException, provider: Optional[str] = None) -> GenerationError:
    """
    Map any exception raised by a client library to a ``GenerationError``.

    Args:
        exc: The exception raised inside a provider call
        provider: Provider id recorded on the translated error

    Returns:
        GenerationError subclass carrying the original message and status
    """
    if isinstance(exc, GenerationError):
        return exc

    message = str(exc) or type(exc).__name__

    if isinstance(exc, genai_errors.APIError):
        return classify_http_failure(message, getattr(exc, "code", None), provider)

    if isinstance(exc, openai.APIStatusError):
        return classify_http_failure(message, exc.status_code, provider)

    if isinstance(exc, httpx.HTTPStatusError):
        return classify_http_failure(message, exc.response.status_code, provider)

    if isinstance(exc, (openai.APIConnectionError, httpx.HTTPError)):
        return TransportError(message, provider=provider)

    if isinstance(exc, ValueError):
        return SchemaError(message, provider=provider)

    return classify_http_failure(message, None, provider)
