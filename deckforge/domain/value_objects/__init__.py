"""Domain value objects."""

from .batch_status import BatchStatus
from .log_entry_type import LogEntryType
from .provider import Language, ProviderId

__all__ = ["BatchStatus", "Language", "LogEntryType", "ProviderId"]
