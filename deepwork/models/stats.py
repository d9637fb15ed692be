"""Progression statistics model."""

from pydantic import BaseModel, Field


class Stats(BaseModel):
    """Accumulated progression for the user.

    `level` is always derivable from `pomodoros_completed`; it is stored so a
    level-up can be detected by comparing before and after a completion.
    """

    xp: int = Field(default=0, ge=0, description="Experience points")
    level: int = Field(default=1, ge=1, le=3, description="Access level (1-3)")
    pomodoros_completed: int = Field(
        default=0,
        ge=0,
        description="Completed WORK phases",
    )
    total_work_seconds: int = Field(
        default=0,
        ge=0,
        description="Seconds ticked during WORK phases",
    )
