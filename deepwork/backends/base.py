"""Abstract side-effect capabilities used by the session engine.

The engine calls these but never inspects or waits on their outcome.
Implementations must return promptly and must not touch session state.
"""

from abc import ABC, abstractmethod
from enum import Enum

from deepwork.models.session import Phase


class NotificationPermission(str, Enum):
    """Whether the user allows desktop notifications."""

    DEFAULT = "default"  # Not yet decided
    GRANTED = "granted"
    DENIED = "denied"


class Ambience(str, Enum):
    """Background tracks that can loop during WORK phases."""

    NONE = "NONE"
    DATACENTER = "DATACENTER"
    RAIN = "RAIN"
    KEYBOARD = "KEYBOARD"


class Alarm(ABC):
    """Plays the phase-complete alarm."""

    @abstractmethod
    def play_alarm(self, volume: float) -> None:
        """Start the alarm without waiting for it to finish.

        Args:
            volume: Playback volume in [0, 1].
        """


class Notifier(ABC):
    """Shows a desktop notification when a phase completes."""

    @property
    @abstractmethod
    def permission(self) -> NotificationPermission:
        """Current notification permission."""

    @abstractmethod
    def request_permission(self) -> NotificationPermission:
        """Ask for permission and return the decision."""

    @abstractmethod
    def notify_phase_complete(self, phase: Phase) -> bool:
        """Notify that `phase` just completed.

        Sends when permission is GRANTED. When it is DEFAULT, requests
        permission first and sends only if it was granted. Stays silent
        when DENIED.

        Returns:
            True if a notification was dispatched.
        """


class AmbiencePlayer(ABC):
    """Loops an ambience track."""

    @property
    @abstractmethod
    def playing(self) -> Ambience:
        """The track currently looping, or NONE."""

    @abstractmethod
    def play(self, ambience: Ambience, volume: float) -> None:
        """Start looping `ambience`, replacing whatever is playing."""

    @abstractmethod
    def stop(self) -> None:
        """Stop any looping track immediately."""


class SilentAlarm(Alarm):
    """Alarm that does nothing (audio disabled)."""

    def play_alarm(self, volume: float) -> None:
        return None


class SilentAmbience(AmbiencePlayer):
    """Ambience player that only remembers what it was asked to play."""

    def __init__(self):
        self._playing = Ambience.NONE

    @property
    def playing(self) -> Ambience:
        return self._playing

    def play(self, ambience: Ambience, volume: float) -> None:
        self._playing = ambience

    def stop(self) -> None:
        self._playing = Ambience.NONE
