"""
Helpers for pulling payloads out of raw provider responses.
"""

import json
from typing import Any, Dict, Optional

from deckforge.domain.exceptions import ContentMissingError, SchemaError

FENCE = "```"
JSON_FENCE = "```json"
NO_IMAGE_MESSAGE = "No image data found in response"


def strip_code_fence(text: str) -> str:
    """Return the body of the first fenced block, or the text unchanged.

    A ```json tagged fence wins over a bare ``` fence.
    """
    if JSON_FENCE in text:
        return text.split(JSON_FENCE, 1)[1].split(FENCE, 1)[0].strip()
    if FENCE in text:
        return text.split(FENCE, 2)[1].strip()
    return text


def parse_json_object(text: str, provider: Optional[str] = None) -> Dict[str, Any]:
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SchemaError(f"Response is not valid JSON: {exc}", provider=provider) from exc
    if not isinstance(parsed, dict):
        raise SchemaError("Response JSON is not an object", provider=provider)
    return parsed


def extract_image_base64(payload: Dict[str, Any], provider: Optional[str] = None) -> str:
    """
    Find the first inline image in a generateContent-style JSON response.

    A top-level ``imageBase64`` shortcut is preferred; otherwise every part of
    the first candidate is scanned for ``inlineData.data``.

    Raises:
        ContentMissingError: If no image payload is present
    """
    shortcut = payload.get("imageBase64")
    if shortcut:
        return shortcut

    candidates = payload.get("candidates") or []
    if candidates:
        parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
        for part in parts:
            inline = part.get("inlineData") or part.get("inline_data") or {}
            if inline.get("data"):
                return inline["data"]

    raise ContentMissingError(NO_IMAGE_MESSAGE, provider=provider)


def error_message_from_payload(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return default


def elide_image_payloads(value: Any) -> Any:
    """Copy of a JSON value with base64 image payloads replaced by a length marker."""
    if isinstance(value, dict):
        elided = {}
        for key, item in value.items():
            if key == "imageBase64" and isinstance(item, str):
                elided[key] = f"<{len(item)} base64 chars>"
            elif key in ("inlineData", "inline_data") and isinstance(item, dict):
                elided[key] = {
                    k: (f"<{len(v)} base64 chars>" if k == "data" and isinstance(v, str) else v)
                    for k, v in item.items()
                }
            else:
                elided[key] = elide_image_payloads(item)
        return elided
    if isinstance(value, list):
        return [elide_image_payloads(item) for item in value]
    return value
