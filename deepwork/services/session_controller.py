"""SessionController - single owner of all terminal state.

Owns Settings, Stats, SessionState (through the engine), the activity log,
the task list, identity, quote, ambience selection and help visibility.
Every public operation runs under one lock, so API requests, console input
and ticks are handled one at a time. After each operation the controller:

1. persists the keys whose value changed,
2. starts or stops the ticker to match ``running``,
3. starts or stops ambience to match phase/running/selection,
4. publishes ``state_changed`` on the event bus.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

from deepwork.backends.base import (
    Alarm,
    Ambience,
    AmbiencePlayer,
    NotificationPermission,
    Notifier,
    SilentAmbience,
)
from deepwork.models.identity import Identity
from deepwork.models.log_entry import LogEntry
from deepwork.models.session import Phase
from deepwork.models.settings import Settings, coerce_minutes
from deepwork.models.task import Task
from deepwork.services.activity_log import ActivityLog
from deepwork.services.command_interpreter import CommandInterpreter, CommandResult
from deepwork.services.display import format_time, progress_bar, progress_fraction
from deepwork.services.event_bus import EventBus
from deepwork.services.progression import level_label, level_title
from deepwork.services.quote_service import QuoteService
from deepwork.services.session_engine import PhaseTransition, SessionEngine
from deepwork.services.state_store import (
    KEYS,
    SETTINGS_KEY,
    STATS_KEY,
    TASKS_KEY,
    USERNAME_KEY,
    StateStore,
)
from deepwork.services.task_list import TaskList
from deepwork.services.ticker import Ticker

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = tuple(Settings.model_fields)


class SessionController:
    """Aggregate that routes every mutation through the engine or interpreter."""

    def __init__(
        self,
        store: StateStore,
        alarm: Alarm | None = None,
        notifier: Notifier | None = None,
        ambience_player: AmbiencePlayer | None = None,
        quotes: QuoteService | None = None,
        event_bus: EventBus | None = None,
        tick_interval: float = 1.0,
        volume: float = 0.5,
    ):
        """Load persisted state and wire the components together.

        Args:
            store: Persistence gateway; read once here.
            alarm: Alarm capability for phase completion.
            notifier: Notification capability for phase completion.
            ambience_player: Loops ambience tracks during WORK.
            quotes: Source of break quotes.
            event_bus: Where state changes are published.
            tick_interval: Seconds between ticks.
            volume: Initial audio volume in [0, 1].
        """
        self._lock = threading.RLock()
        self.store = store
        self.event_bus = event_bus
        self.notifier = notifier
        self.quotes = quotes or QuoteService()
        self.ambience_player = ambience_player or SilentAmbience()
        self.ambience = Ambience.NONE
        self.help_visible = False

        self.log = ActivityLog()
        self.identity = Identity(username=store.load_username())
        self.tasks = TaskList(store.load_tasks())
        self.engine = SessionEngine(
            settings=store.load_settings(),
            stats=store.load_stats(),
            log=self.log,
            alarm=alarm,
            notifier=notifier,
            pick_quote=self.quotes.pick,
        )
        self.engine.volume = max(0.0, min(volume, 1.0))
        self.engine.quote = self.quotes.pick()
        self.interpreter = CommandInterpreter(
            engine=self.engine,
            tasks=self.tasks,
            log=self.log,
            identity=self.identity,
            on_help=self._open_help,
        )

        self._ticker = Ticker(self._on_tick, interval=tick_interval)
        self._saved: dict[str, Any] = {}
        self._requested: tuple[Ambience, float | None] = (Ambience.NONE, None)

        if event_bus is not None:
            self.log.subscribe(self._publish_log)

        self._boot()

    # ── Startup / shutdown ──────────────────────────────────────────────────

    def _boot(self) -> None:
        with self._mutation():
            self.log.system("Terminal initialized.")
            if self.identity.username:
                self.log.system(f"Welcome back, {self.identity.username}.")
            else:
                self.log.system("USER NOT IDENTIFIED. PLEASE ENTER YOUR NAME.")

            if (
                self.notifier is not None
                and self.notifier.permission == NotificationPermission.DEFAULT
            ):
                try:
                    permission = self.notifier.request_permission()
                except Exception as e:
                    logger.warning(f"Notification permission request failed: {e}")
                    permission = NotificationPermission.DENIED
                if permission == NotificationPermission.GRANTED:
                    self.log.system("Notification access GRANTED.")
                else:
                    self.log.system("Notification access DENIED.")

    def shutdown(self) -> None:
        """Stop ticking and silence ambience."""
        with self._lock:
            self._ticker.stop()
            self._requested = (Ambience.NONE, None)
            try:
                self.ambience_player.stop()
            except Exception as e:
                logger.warning(f"Failed to stop ambience: {e}")

    # ── Operations ──────────────────────────────────────────────────────────

    def submit(self, line: str) -> CommandResult:
        """Interpret one line from the terminal input."""
        with self._mutation():
            return self.interpreter.submit(line)

    def toggle_running(self) -> bool:
        """Start or pause the timer."""
        with self._mutation():
            return self.engine.toggle_running()

    def reset(self) -> None:
        """Refill the current phase and stop the clock."""
        with self._mutation():
            self.engine.reset()

    def skip(self) -> PhaseTransition:
        """Complete the current phase immediately."""
        with self._mutation():
            transition = self.engine.skip()
            self._publish_transition(transition)
            return transition

    def tick(self) -> PhaseTransition | None:
        """Advance the clock by one second."""
        with self._mutation():
            transition = self.engine.tick()
            if transition is not None:
                self._publish_transition(transition)
            return transition

    def apply_settings(self, settings: Settings) -> None:
        """Replace the timer settings."""
        with self._mutation():
            self.engine.apply_settings(settings)

    def update_settings(self, data: dict[str, Any]) -> None:
        """Apply a settings-form submission.

        Timer fields missing from `data` keep their current value; present
        ones are coerced (blank or unparseable → 0). The form may also carry
        `username`, `ambience` and `volume`.

        Raises:
            ValueError: If `ambience` is not a known selection.
        """
        with self._mutation():
            if "ambience" in data or "volume" in data:
                self._set_ambience(data.get("ambience"), data.get("volume"))

            username = data.get("username")
            if isinstance(username, str) and username.strip():
                self.identity.username = username.strip()

            current = self.engine.settings.model_dump()
            for name in SETTINGS_FIELDS:
                if name in data:
                    current[name] = coerce_minutes(data[name])
            self.engine.apply_settings(Settings(**current))

    def set_username(self, name: str) -> None:
        """Replace the username directly (settings edit flow)."""
        name = name.strip()
        if not name:
            raise ValueError("Username must not be empty")
        with self._mutation():
            self.identity.username = name
            self.identity.editing_name = False

    def set_ambience(self, ambience: str | Ambience | None, volume: float | None = None) -> None:
        """Choose the ambience track and/or the volume.

        Raises:
            ValueError: If `ambience` is not a known selection.
        """
        with self._mutation():
            self._set_ambience(ambience, volume)

    def toggle_task(self, task_id: int) -> Task | None:
        with self._mutation():
            return self.tasks.toggle(task_id)

    def delete_task(self, task_id: int) -> bool:
        with self._mutation():
            return self.tasks.delete(task_id)

    def close_help(self) -> None:
        with self._mutation():
            self.help_visible = False

    # ── Queries ─────────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.engine.running

    @property
    def ticker(self) -> Ticker:
        return self._ticker

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the whole terminal."""
        with self._lock:
            state = self.engine.state
            total = self.engine.total_duration()
            fraction = progress_fraction(state.remaining_seconds, total)
            stats = self.engine.stats
            return {
                "session": {
                    "phase": state.phase.value,
                    "remaining_seconds": state.remaining_seconds,
                    "total_seconds": total,
                    "running": state.running,
                    "cycles_completed_in_window": state.cycles_completed_in_window,
                    "display": format_time(state.remaining_seconds),
                    "progress": fraction,
                    "progress_bar": progress_bar(fraction, 30),
                },
                "settings": self.engine.settings.model_dump(),
                "stats": {
                    **stats.model_dump(),
                    "level_title": level_title(stats.pomodoros_completed),
                    "level_label": level_label(stats.pomodoros_completed),
                    "uptime": format_time(stats.total_work_seconds),
                },
                "identity": self.identity.model_dump(),
                "tasks": [t.model_dump() for t in self.tasks.list_tasks()],
                "log": [e.model_dump(mode="json") for e in self.log.entries()],
                "quote": self.engine.quote,
                "ambience": self.ambience.value,
                "volume": self.engine.volume,
                "help_visible": self.help_visible,
                "notifications": (
                    self.notifier.permission.value if self.notifier is not None else None
                ),
            }

    # ── Internals ───────────────────────────────────────────────────────────

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        with self._lock:
            yield
            self._after_change()

    def _after_change(self) -> None:
        self._persist()
        self._sync_ticker()
        self._sync_ambience()
        if self.event_bus is not None:
            self.event_bus.emit("state_changed", self.snapshot())

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._ticker.generation or not self.engine.running:
                logger.debug(f"Ignoring stale tick from generation {generation}")
                return
            self.tick()

    def _open_help(self) -> None:
        self.help_visible = True

    def _set_ambience(self, ambience: str | Ambience | None, volume: float | None) -> None:
        selection = self.ambience
        if ambience is not None:
            selection = Ambience(ambience.upper() if isinstance(ambience, str) else ambience)
        level = self.engine.volume
        if volume is not None:
            level = max(0.0, min(float(volume), 1.0))
        self.ambience = selection
        self.engine.volume = level

    def _serialized(self) -> dict[str, Any]:
        return {
            SETTINGS_KEY: self.engine.settings.model_dump(),
            STATS_KEY: self.engine.stats.model_dump(),
            USERNAME_KEY: self.identity.username,
            TASKS_KEY: [t.model_dump() for t in self.tasks.list_tasks()],
        }

    def _persist(self) -> None:
        """Write every key whose value differs from what was last saved."""
        current = self._serialized()
        for key in KEYS:
            value = current[key]
            if key in self._saved and self._saved[key] == value:
                continue
            if key == USERNAME_KEY and not value:
                continue
            if self.store.save(key, value):
                self._saved[key] = value

    def _sync_ticker(self) -> None:
        if self.engine.running:
            self._ticker.start()
        else:
            self._ticker.stop()

    def _sync_ambience(self) -> None:
        wanted = Ambience.NONE
        if (
            self.engine.running
            and self.engine.phase == Phase.WORK
            and self.ambience != Ambience.NONE
        ):
            wanted = self.ambience

        request = (wanted, None if wanted == Ambience.NONE else self.engine.volume)
        if request == self._requested:
            return

        self._requested = request
        try:
            if wanted == Ambience.NONE:
                self.ambience_player.stop()
            else:
                self.ambience_player.play(wanted, self.engine.volume)
        except Exception as e:
            logger.warning(f"Ambience playback failed: {e}")

    def _publish_log(self, entry: LogEntry | None) -> None:
        if entry is None:
            self.event_bus.emit("log_cleared", {})
        else:
            self.event_bus.emit("log_appended", entry.model_dump(mode="json"))

    def _publish_transition(self, transition: PhaseTransition) -> None:
        if self.event_bus is None:
            return
        data = asdict(transition)
        data["from_phase"] = transition.from_phase.value
        data["to_phase"] = transition.to_phase.value
        data["trigger"] = transition.trigger.value
        data["timestamp"] = transition.timestamp.isoformat()
        self.event_bus.emit("phase_completed", data)
