"""Session state model - phase, clock and cycle window."""

from enum import Enum

from pydantic import BaseModel, Field


class Phase(str, Enum):
    """Timer phases.

    Phase transitions:
    - WORK → SHORT_BREAK (work cycle complete, window not full)
    - WORK → LONG_BREAK (work cycle complete, window full)
    - SHORT_BREAK → WORK (break complete)
    - LONG_BREAK → WORK (break complete)
    """

    WORK = "WORK"
    """Focused work, counts towards progression."""

    SHORT_BREAK = "SHORT_BREAK"
    """Short rest between work cycles."""

    LONG_BREAK = "LONG_BREAK"
    """Long rest after a full window of work cycles."""


class SessionState(BaseModel):
    """The live state of the timer.

    Not persisted: a restart always begins a fresh WORK phase.
    """

    phase: Phase = Field(default=Phase.WORK, description="Current phase")
    remaining_seconds: int = Field(
        default=25 * 60,
        ge=0,
        description="Seconds left in the current phase",
    )
    running: bool = Field(default=False, description="Whether the clock is ticking")
    cycles_completed_in_window: int = Field(
        default=0,
        ge=0,
        description="Work cycles completed since the last long break",
    )
