"""Side-effect backends (audio) and their abstract interfaces."""

from deepwork.backends.base import (
    Alarm,
    Ambience,
    AmbiencePlayer,
    NotificationPermission,
    Notifier,
    SilentAlarm,
    SilentAmbience,
)

__all__ = [
    "Alarm",
    "Ambience",
    "AmbiencePlayer",
    "NotificationPermission",
    "Notifier",
    "SilentAlarm",
    "SilentAmbience",
]
