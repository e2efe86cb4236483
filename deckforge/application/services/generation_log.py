"""
Append-only generation log for one session.
"""

from typing import Tuple

from deckforge.application.ports import LogSink
from deckforge.domain.entities import GenerationLogEntry
from deckforge.infra.export.log_export import render_log_export


class GenerationLog(LogSink):
    """In-memory log of provider interactions, readable for export."""

    def __init__(self) -> None:
        self._entries: list[GenerationLogEntry] = []

    def record(self, entry: GenerationLogEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> Tuple[GenerationLogEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def export_text(self) -> str:
        """Plain-text dump of every entry, oldest first."""
        return render_log_export(self._entries)
