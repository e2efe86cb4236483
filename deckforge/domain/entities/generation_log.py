"""
Generation log entry: an observability record of one provider interaction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from deckforge.domain.value_objects import LogEntryType


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class GenerationLogEntry:
    type: LogEntryType
    timestamp: str = field(default_factory=_utc_timestamp)
    url: Optional[str] = None
    method: Optional[str] = None
    headers: Optional[Any] = None
    body: Optional[Any] = None
    response: Optional[Any] = None
    message: Optional[str] = None
