"""Domain models for Deep Work Terminal."""

from deepwork.models.config import AppConfig, AudioConfig, NotificationConfig
from deepwork.models.identity import Identity
from deepwork.models.log_entry import LogEntry, LogKind
from deepwork.models.session import Phase, SessionState
from deepwork.models.settings import Settings, coerce_minutes
from deepwork.models.stats import Stats
from deepwork.models.task import Task

__all__ = [
    # Config
    "AppConfig",
    "AudioConfig",
    "NotificationConfig",
    # Session
    "Phase",
    "SessionState",
    "Settings",
    "coerce_minutes",
    # Progression
    "Stats",
    # Journal
    "LogEntry",
    "LogKind",
    # Objectives
    "Task",
    "Identity",
]
