"""Timer settings model."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


def coerce_minutes(value: Any) -> int:
    """Coerce a settings-form value to a non-negative integer.

    Blank or unparseable input becomes 0 rather than being rejected, and
    negative numbers are clamped to 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            number = int(float(value))
        except (TypeError, ValueError):
            return 0
    return max(0, number)


class Settings(BaseModel):
    """Durations for the three phases and the long-break cadence.

    All values are whole minutes (or cycles) and never negative.
    """

    work_minutes: int = Field(default=25, ge=0, description="Length of a WORK phase")
    short_break_minutes: int = Field(
        default=5,
        ge=0,
        description="Length of a SHORT_BREAK phase",
    )
    long_break_minutes: int = Field(
        default=15,
        ge=0,
        description="Length of a LONG_BREAK phase",
    )
    cycles_before_long_break: int = Field(
        default=4,
        ge=0,
        description="Completed work cycles that trigger a long break",
    )

    @field_validator(
        "work_minutes",
        "short_break_minutes",
        "long_break_minutes",
        "cycles_before_long_break",
        mode="before",
    )
    @classmethod
    def _coerce(cls, value: Any) -> int:
        return coerce_minutes(value)
