"""Session engine - the phase state machine of the focus timer.

Phase graph:

```
WORK → SHORT_BREAK → WORK → SHORT_BREAK → ... → WORK → LONG_BREAK → WORK
```

A phase changes only when its clock runs out (tick), when it is skipped, or
when it is reset. Completing a WORK phase awards progression; completing a
break does not.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from deepwork.backends.base import Alarm, Notifier, SilentAlarm
from deepwork.models.session import Phase, SessionState
from deepwork.models.settings import Settings
from deepwork.models.stats import Stats
from deepwork.services.activity_log import ActivityLog
from deepwork.services.progression import XP_PER_POMODORO, level_label, level_number

logger = logging.getLogger(__name__)


class TransitionTrigger(str, Enum):
    """What caused a phase to complete."""

    CLOCK_EXPIRED = "clock_expired"
    """The remaining time reached zero on a tick."""

    SKIPPED = "skipped"
    """The user forced completion."""


@dataclass
class PhaseTransition:
    """Result of a phase completion."""

    from_phase: Phase
    to_phase: Phase
    trigger: TransitionTrigger
    xp_awarded: int = 0
    level_up: bool = False
    cycles_completed_in_window: int = 0
    timestamp: datetime = field(default_factory=datetime.now)


class InvalidTransitionError(Exception):
    """Raised when a phase is entered that is not reachable from the current one."""

    def __init__(self, from_phase: Phase, to_phase: Phase):
        self.from_phase = from_phase
        self.to_phase = to_phase
        super().__init__(f"Invalid transition: {from_phase.value} → {to_phase.value}")


class PhaseTransitionError(Exception):
    """Raised when completion is requested while the clock is still running."""


# Valid transitions: from_phase → reachable phases
NEXT_PHASES: dict[Phase, tuple[Phase, ...]] = {
    Phase.WORK: (Phase.SHORT_BREAK, Phase.LONG_BREAK),
    Phase.SHORT_BREAK: (Phase.WORK,),
    Phase.LONG_BREAK: (Phase.WORK,),
}


def phase_duration(settings: Settings, phase: Phase) -> int:
    """Full length of `phase` in seconds under `settings`."""
    if phase == Phase.WORK:
        return settings.work_minutes * 60
    if phase == Phase.SHORT_BREAK:
        return settings.short_break_minutes * 60
    return settings.long_break_minutes * 60


class SessionEngine:
    """Owns the phase clock and drives progression and the activity log.

    The engine is not thread-safe; callers serialise access (see
    SessionController). Completion is only entered with ``running`` already
    cleared, so a single zero-crossing can never complete twice.
    """

    def __init__(
        self,
        settings: Settings,
        stats: Stats,
        log: ActivityLog,
        alarm: Alarm | None = None,
        notifier: Notifier | None = None,
        pick_quote: Callable[[], str] | None = None,
        state: SessionState | None = None,
    ):
        """Initialize the engine.

        Args:
            settings: Current durations.
            stats: Progression record, mutated in place.
            log: Activity log to write to.
            alarm: Alarm capability. Defaults to a silent alarm.
            notifier: Notification capability. None disables notifications.
            pick_quote: Returns a quote for display during breaks.
            state: Initial state. Defaults to a fresh WORK phase.
        """
        self.settings = settings
        self.stats = stats
        self.log = log
        self.alarm = alarm or SilentAlarm()
        self.notifier = notifier
        self.pick_quote = pick_quote
        self.state = state or SessionState(
            phase=Phase.WORK,
            remaining_seconds=phase_duration(settings, Phase.WORK),
        )
        self.quote = ""
        self.volume = 0.5

    # ── Queries ─────────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def total_duration(self) -> int:
        """Full length of the current phase in seconds."""
        return phase_duration(self.settings, self.state.phase)

    # ── Clock ───────────────────────────────────────────────────────────────

    def tick(self) -> PhaseTransition | None:
        """Advance the clock by one second.

        Does nothing unless running. WORK seconds are credited to
        total_work_seconds whether or not the cycle ends up completing.

        Returns:
            The PhaseTransition if this tick completed the phase, else None.
        """
        if not self.state.running:
            return None

        if self.state.remaining_seconds > 0:
            self.state.remaining_seconds -= 1
            if self.state.phase == Phase.WORK:
                self.stats.total_work_seconds += 1

        if self.state.remaining_seconds == 0:
            self.state.running = False
            return self.complete_phase(TransitionTrigger.CLOCK_EXPIRED)

        return None

    def toggle_running(self) -> bool:
        """Start or pause the clock.

        A phase whose clock already reached zero cannot be resumed; it must
        be reset or skipped first.

        Returns:
            True if the running flag changed.
        """
        if not self.state.running and self.state.remaining_seconds == 0:
            logger.debug("Refusing to start a finished phase")
            return False

        was_running = self.state.running
        self.state.running = not was_running
        self.log.system("Timer PAUSED." if was_running else "Timer STARTED.")
        return True

    def reset(self) -> None:
        """Stop the clock and refill the current phase from current settings."""
        self.state.running = False
        self.state.remaining_seconds = self.total_duration()
        self.log.system("Timer RESET.")

    def skip(self) -> PhaseTransition:
        """Force the current phase to complete now.

        Runs the same pipeline as a natural completion, including
        progression and the alarm.
        """
        self.state.running = False
        return self.complete_phase(TransitionTrigger.SKIPPED)

    def apply_settings(self, settings: Settings) -> None:
        """Replace settings.

        While idle the current phase is refilled immediately. While running
        the new durations take effect at the next transition or reset.
        """
        self.settings = settings
        if not self.state.running:
            self.state.remaining_seconds = self.total_duration()
            self.log.system("Configuration applied. Timer adjusted.")
        else:
            self.log.system("Configuration saved. Changes apply on next cycle or reset.")

    # ── Completion ──────────────────────────────────────────────────────────

    def complete_phase(
        self, trigger: TransitionTrigger = TransitionTrigger.CLOCK_EXPIRED
    ) -> PhaseTransition:
        """Finish the current phase and enter the next one.

        Args:
            trigger: What caused the completion.

        Returns:
            PhaseTransition describing what happened.

        Raises:
            PhaseTransitionError: If the clock is still running.
        """
        if self.state.running:
            raise PhaseTransitionError("Cannot complete a phase while the clock is running")

        self._dispatch_side_effects()

        from_phase = self.state.phase
        if from_phase == Phase.WORK:
            return self._complete_work(trigger)

        self._enter(Phase.WORK)
        self.log.system("Break sequence complete. Ready for next cycle.")
        logger.info(f"{from_phase.value} complete ({trigger.value}), back to WORK")
        return PhaseTransition(
            from_phase=from_phase,
            to_phase=Phase.WORK,
            trigger=trigger,
            cycles_completed_in_window=self.state.cycles_completed_in_window,
        )

    def _complete_work(self, trigger: TransitionTrigger) -> PhaseTransition:
        previous_level = self.stats.level
        self.stats.pomodoros_completed += 1
        self.stats.xp += XP_PER_POMODORO
        self.stats.level = level_number(self.stats.pomodoros_completed)
        level_up = self.stats.level > previous_level

        self.log.achievement(f"Work cycle complete. +{XP_PER_POMODORO}XP.")
        if level_up:
            self.log.achievement(
                f"ACCESS LEVEL INCREASED: {level_label(self.stats.pomodoros_completed)}"
            )

        cycles = self.state.cycles_completed_in_window + 1
        if cycles >= self.settings.cycles_before_long_break:
            self._enter(Phase.LONG_BREAK)
            self.state.cycles_completed_in_window = 0
            self.log.system("Initiating Long Break sequence.")
        else:
            self._enter(Phase.SHORT_BREAK)
            self.state.cycles_completed_in_window = cycles
            self.log.system("Initiating Short Break sequence.")

        if self.pick_quote is not None:
            self.quote = self.pick_quote()

        logger.info(
            f"WORK complete ({trigger.value}): pomodoros={self.stats.pomodoros_completed}, "
            f"next={self.state.phase.value}"
        )
        return PhaseTransition(
            from_phase=Phase.WORK,
            to_phase=self.state.phase,
            trigger=trigger,
            xp_awarded=XP_PER_POMODORO,
            level_up=level_up,
            cycles_completed_in_window=self.state.cycles_completed_in_window,
        )

    def _enter(self, to_phase: Phase) -> None:
        """Move to `to_phase` with a full clock.

        Raises:
            InvalidTransitionError: If `to_phase` is not reachable.
        """
        if to_phase not in NEXT_PHASES[self.state.phase]:
            raise InvalidTransitionError(self.state.phase, to_phase)
        self.state.phase = to_phase
        self.state.remaining_seconds = phase_duration(self.settings, to_phase)

    def _dispatch_side_effects(self) -> None:
        """Fire the alarm and the notification; failures never reach the caller."""
        try:
            self.alarm.play_alarm(self.volume)
        except Exception as e:
            logger.warning(f"Alarm failed: {e}")

        if self.notifier is None:
            return
        try:
            self.notifier.notify_phase_complete(self.state.phase)
        except Exception as e:
            logger.warning(f"Notification failed: {e}")
