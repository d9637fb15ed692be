"""Pytest configuration and shared fixtures for Deep Work Terminal tests."""

import tempfile
from pathlib import Path

import pytest

from deepwork.backends.base import Alarm, NotificationPermission, Notifier
from deepwork.models.session import Phase
from deepwork.services.config_service import reset_config_service
from deepwork.services.event_bus import reset_event_bus


class RecordingAlarm(Alarm):
    """Alarm double that records each volume it was played at."""

    def __init__(self, fail: bool = False):
        self.volumes: list[float] = []
        self.fail = fail

    def play_alarm(self, volume: float) -> None:
        self.volumes.append(volume)
        if self.fail:
            raise RuntimeError("speaker on fire")


class RecordingNotifier(Notifier):
    """Notifier double with a scripted permission decision."""

    def __init__(
        self,
        permission: NotificationPermission = NotificationPermission.GRANTED,
        decision: NotificationPermission = NotificationPermission.GRANTED,
    ):
        self._permission = permission
        self.decision = decision
        self.requests = 0
        self.phases: list[Phase] = []

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    def request_permission(self) -> NotificationPermission:
        self.requests += 1
        self._permission = self.decision
        return self._permission

    def notify_phase_complete(self, phase: Phase) -> bool:
        if self._permission == NotificationPermission.DEFAULT:
            self.request_permission()
        if self._permission != NotificationPermission.GRANTED:
            return False
        self.phases.append(phase)
        return True


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def alarm():
    return RecordingAlarm()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def failing_alarm():
    return RecordingAlarm(fail=True)


@pytest.fixture
def notifier_factory():
    """Build RecordingNotifiers with a given permission and decision."""
    return RecordingNotifier


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons before and after each test."""
    reset_config_service()
    reset_event_bus()
    yield
    reset_config_service()
    reset_event_bus()
