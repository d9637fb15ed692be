"""Tests for NotificationService."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from deepwork.backends.base import NotificationPermission
from deepwork.models.config import NotificationConfig
from deepwork.models.session import Phase
from deepwork.services.notification_service import (
    NotificationPayload,
    NotificationService,
)


def which_only(*installed):
    """Fake shutil.which that finds only the given commands."""
    return lambda name: f"/usr/bin/{name}" if name in installed else None


@pytest.fixture
def notification_service():
    """Create a NotificationService that sends inline."""
    return NotificationService(NotificationConfig(), background=False)


class TestNotificationServiceInit:
    """Tests for NotificationService initialization."""

    def test_creates_with_defaults(self):
        """NotificationService starts enabled with undecided permission."""
        service = NotificationService()
        assert service.enabled is True
        assert service.permission == NotificationPermission.DEFAULT
        assert service.last_notification is None


class TestEnabledProperty:
    """Tests for enabled property."""

    def test_enabled_setter(self, notification_service):
        """enabled property can be set."""
        notification_service.enabled = False
        assert notification_service.enabled is False

    def test_reenabling_clears_denial(self):
        """Turning notifications back on asks for permission again."""
        service = NotificationService(permission=NotificationPermission.DENIED)
        service.enabled = True
        assert service.permission == NotificationPermission.DEFAULT


class TestRequestPermission:
    """Tests for request_permission."""

    @patch("deepwork.services.notification_service.shutil.which")
    def test_granted_when_notifier_installed(self, mock_which, notification_service):
        """Permission is granted when terminal-notifier is installed."""
        mock_which.side_effect = which_only("terminal-notifier")

        assert notification_service.request_permission() == NotificationPermission.GRANTED
        assert notification_service.permission == NotificationPermission.GRANTED

    @patch("deepwork.services.notification_service.shutil.which")
    def test_denied_when_nothing_installed(self, mock_which, notification_service):
        """Permission is denied when no notifier is installed."""
        mock_which.return_value = None

        assert notification_service.request_permission() == NotificationPermission.DENIED

    @patch("deepwork.services.notification_service.shutil.which")
    def test_denied_when_disabled(self, mock_which):
        """Permission is denied when notifications are disabled in config."""
        mock_which.side_effect = which_only("terminal-notifier")
        service = NotificationService(NotificationConfig(enabled=False))

        assert service.request_permission() == NotificationPermission.DENIED

    @patch("deepwork.services.notification_service.shutil.which")
    def test_decision_is_sticky(self, mock_which):
        """Once decided, permission is not asked again."""
        service = NotificationService(permission=NotificationPermission.GRANTED)

        assert service.request_permission() == NotificationPermission.GRANTED
        mock_which.assert_not_called()


class TestNotifyPhaseComplete:
    """Tests for notify_phase_complete."""

    @patch("deepwork.services.notification_service.subprocess.run")
    @patch("deepwork.services.notification_service.shutil.which")
    def test_sends_with_terminal_notifier(self, mock_which, mock_run, notification_service):
        """A granted notifier sends the configured title and message."""
        mock_which.side_effect = which_only("terminal-notifier")
        mock_run.return_value = MagicMock(returncode=0)

        result = notification_service.notify_phase_complete(Phase.WORK)

        assert result is True
        call_args = mock_run.call_args[0][0]
        assert call_args[0] == "terminal-notifier"
        assert "Sudo Pomodoro" in call_args
        assert "Timer Complete! Time for next sequence." in call_args
        assert notification_service.last_notification is not None

    @patch("deepwork.services.notification_service.subprocess.run")
    @patch("deepwork.services.notification_service.shutil.which")
    def test_sends_with_notify_send(self, mock_which, mock_run, notification_service):
        """notify-send is used when terminal-notifier is missing."""
        mock_which.side_effect = which_only("notify-send")
        mock_run.return_value = MagicMock(returncode=0)

        notification_service.notify_phase_complete(Phase.SHORT_BREAK)

        assert mock_run.call_args[0][0] == [
            "notify-send",
            "Sudo Pomodoro",
            "Timer Complete! Time for next sequence.",
        ]

    @patch("deepwork.services.notification_service.subprocess.run")
    @patch("deepwork.services.notification_service.shutil.which")
    def test_silent_when_denied(self, mock_which, mock_run, notification_service):
        """Nothing is sent when permission is denied."""
        mock_which.return_value = None

        assert notification_service.notify_phase_complete(Phase.WORK) is False
        mock_run.assert_not_called()

    @patch("deepwork.services.notification_service.subprocess.run")
    def test_silent_when_disabled(self, mock_run):
        """Nothing is sent when notifications are disabled."""
        service = NotificationService(
            NotificationConfig(enabled=False),
            permission=NotificationPermission.GRANTED,
            background=False,
        )

        assert service.notify_phase_complete(Phase.WORK) is False
        mock_run.assert_not_called()

    @patch("deepwork.services.notification_service.threading.Thread")
    @patch("deepwork.services.notification_service.shutil.which")
    def test_background_dispatch_uses_daemon_thread(self, mock_which, mock_thread):
        """By default sending happens on a daemon thread."""
        mock_which.side_effect = which_only("terminal-notifier")
        service = NotificationService()

        assert service.notify_phase_complete(Phase.WORK) is True
        assert mock_thread.call_args.kwargs["daemon"] is True
        mock_thread.return_value.start.assert_called_once()


class TestBuildCommand:
    """Tests for build_command."""

    def test_terminal_notifier_with_sound(self):
        """The sound flag adds -sound default."""
        service = NotificationService(NotificationConfig(sound=True))
        cmd = service.build_command(NotificationPayload(title="T", message="M"))

        assert cmd == ["terminal-notifier", "-title", "T", "-message", "M", "-sound", "default"]

    def test_terminal_notifier_without_sound(self):
        """No sound flag by default."""
        service = NotificationService()
        cmd = service.build_command(NotificationPayload(title="T", message="M"))

        assert "-sound" not in cmd


class TestSend:
    """Tests for failure handling when sending."""

    @patch("deepwork.services.notification_service.subprocess.run")
    def test_nonzero_exit(self, mock_run, notification_service):
        """A failing notifier returns False."""
        mock_run.return_value = MagicMock(returncode=1, stderr="boom")
        assert notification_service._send(NotificationPayload("T", "M")) is False

    @patch("deepwork.services.notification_service.subprocess.run")
    def test_missing_binary(self, mock_run, notification_service):
        """A missing binary returns False."""
        mock_run.side_effect = FileNotFoundError()
        assert notification_service._send(NotificationPayload("T", "M")) is False

    @patch("deepwork.services.notification_service.subprocess.run")
    def test_timeout(self, mock_run, notification_service):
        """A hung notifier returns False."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="terminal-notifier", timeout=5)
        assert notification_service._send(NotificationPayload("T", "M")) is False


class TestNotifyCustom:
    """Tests for notify_custom."""

    @patch("deepwork.services.notification_service.subprocess.run")
    @patch("deepwork.services.notification_service.shutil.which")
    def test_sends_custom(self, mock_which, mock_run, notification_service):
        """Custom notifications are sent inline."""
        mock_which.side_effect = which_only("terminal-notifier")
        mock_run.return_value = MagicMock(returncode=0)

        assert notification_service.notify_custom("Hello", "World") is True
        assert "Hello" in mock_run.call_args[0][0]

    @patch("deepwork.services.notification_service.shutil.which")
    def test_no_notifier_installed(self, mock_which, notification_service):
        """Without a notifier custom notifications fail."""
        mock_which.return_value = None
        assert notification_service.notify_custom("Hello", "World") is False
