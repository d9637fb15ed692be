"""Services for Deep Work Terminal."""

from deepwork.services.activity_log import LOG_CAPACITY, ActivityLog
from deepwork.services.command_interpreter import (
    COMMAND_HELP,
    CommandInterpreter,
    CommandResult,
    InputKind,
    parse_command,
)
from deepwork.services.config_service import (
    ConfigService,
    get_config_service,
    reset_config_service,
)
from deepwork.services.event_bus import Event, EventBus, get_event_bus, reset_event_bus
from deepwork.services.notification_service import NotificationPayload, NotificationService
from deepwork.services.progression import (
    LEVEL_LABELS,
    XP_PER_POMODORO,
    level_label,
    level_number,
    level_title,
)
from deepwork.services.quote_service import DEFAULT_QUOTES, QuoteService
from deepwork.services.session_controller import SessionController
from deepwork.services.session_engine import (
    InvalidTransitionError,
    PhaseTransition,
    PhaseTransitionError,
    SessionEngine,
    TransitionTrigger,
    phase_duration,
)
from deepwork.services.state_store import StateStore
from deepwork.services.task_list import TaskList
from deepwork.services.ticker import Ticker

__all__ = [
    "ActivityLog",
    "LOG_CAPACITY",
    "COMMAND_HELP",
    "CommandInterpreter",
    "CommandResult",
    "InputKind",
    "parse_command",
    "ConfigService",
    "get_config_service",
    "reset_config_service",
    "Event",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
    "NotificationPayload",
    "NotificationService",
    # Progression
    "LEVEL_LABELS",
    "XP_PER_POMODORO",
    "level_label",
    "level_number",
    "level_title",
    "DEFAULT_QUOTES",
    "QuoteService",
    # Session
    "InvalidTransitionError",
    "PhaseTransition",
    "PhaseTransitionError",
    "SessionController",
    "SessionEngine",
    "TransitionTrigger",
    "phase_duration",
    "StateStore",
    "TaskList",
    "Ticker",
]
