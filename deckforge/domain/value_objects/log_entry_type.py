from enum import Enum


class LogEntryType(str, Enum):
    """Kind of a generation log record."""

    REQUEST = "request"
    RESPONSE = "response"
    ERROR = "error"
    INFO = "info"
