"""
Plain-text export of the session generation log.
"""

import json
from datetime import datetime, timezone
from typing import Any, Iterable

from deckforge.domain.entities import GenerationLogEntry

RULE = "-" * 40


def _as_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def render_entry(entry: GenerationLogEntry) -> str:
    return (
        f"[{entry.timestamp}] [{entry.type.value.upper()}] {entry.message or ''}\n"
        f"URL: {entry.url or 'N/A'}\n"
        f"Method: {entry.method or 'N/A'}\n"
        f"Headers: {_as_json(entry.headers)}\n"
        f"Body: {_as_json(entry.body)}\n"
        f"Response: {_as_json(entry.response)}\n"
        f"{RULE}\n"
    )


def render_log_export(entries: Iterable[GenerationLogEntry]) -> str:
    return "".join(render_entry(entry) for entry in entries)


def log_export_filename() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
    return f"debug_logs_{stamp}.txt"
