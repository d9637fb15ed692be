"""Activity log entry model."""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class LogKind(str, Enum):
    """Categories of activity log entries."""

    FOCUS = "FOCUS"  # Objective added from free text
    SYSTEM = "SYSTEM"  # Timer and command notices
    ACHIEVEMENT = "ACHIEVEMENT"  # XP awards and level-ups


def _local_time() -> str:
    return datetime.now().strftime("%H:%M:%S")


class LogEntry(BaseModel):
    """A single line in the activity log.

    Attributes:
        id: Unique identifier for the entry.
        timestamp: Local wall-clock time of the append, 24h ``HH:MM:SS``.
        message: Human-readable text.
        kind: Entry category.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = Field(default_factory=_local_time)
    message: str
    kind: LogKind = LogKind.SYSTEM
