"""NotificationService for desktop notifications.

Sends a native notification when a timer phase completes, using
terminal-notifier (macOS) or notify-send (Linux). Sending happens on a
daemon thread so the timer never waits on the notifier.
"""

import logging
import shutil
import subprocess
import threading
from dataclasses import dataclass
from datetime import datetime

from deepwork.backends.base import NotificationPermission, Notifier
from deepwork.models.config import NotificationConfig
from deepwork.models.session import Phase

logger = logging.getLogger(__name__)

# Notifier executables in order of preference
NOTIFIER_COMMANDS = ("terminal-notifier", "notify-send")


@dataclass
class NotificationPayload:
    """Data for a notification."""

    title: str
    message: str
    phase: Phase | None = None
    created_at: datetime | None = None


class NotificationService(Notifier):
    """Sends desktop notifications for completed phases.

    Permission starts undecided. It is granted when a notifier executable is
    installed and notifications are enabled, and denied otherwise. Once
    denied, later phases stay silent.
    """

    def __init__(
        self,
        config: NotificationConfig | None = None,
        permission: NotificationPermission = NotificationPermission.DEFAULT,
        background: bool = True,
    ):
        """Initialize the NotificationService.

        Args:
            config: Notification settings.
            permission: Initial permission state.
            background: Send on a daemon thread instead of inline.
        """
        self.config = config or NotificationConfig()
        self._permission = permission
        self._background = background
        self._command: str | None = None
        self._last_notification: datetime | None = None

    @property
    def enabled(self) -> bool:
        """Check if notifications are enabled."""
        return self.config.enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        """Set notifications enabled state.

        Re-enabling clears a previous denial so permission is asked again.
        """
        self.config.enabled = value
        if value and self._permission == NotificationPermission.DENIED:
            self._permission = NotificationPermission.DEFAULT

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    @property
    def last_notification(self) -> datetime | None:
        return self._last_notification

    def request_permission(self) -> NotificationPermission:
        """Decide permission by checking for an installed notifier.

        Returns:
            GRANTED if notifications are enabled and a notifier is installed,
            DENIED otherwise.
        """
        if self._permission != NotificationPermission.DEFAULT:
            return self._permission

        self._command = self._find_command() if self.config.enabled else None
        if self._command:
            self._permission = NotificationPermission.GRANTED
            logger.info(f"Notifications granted via {self._command}")
        else:
            self._permission = NotificationPermission.DENIED
            logger.info("Notifications denied: disabled or no notifier installed")
        return self._permission

    def notify_phase_complete(self, phase: Phase) -> bool:
        """Send the phase-complete notification if permitted.

        Args:
            phase: The phase that just completed.

        Returns:
            True if a notification was dispatched.
        """
        if not self.config.enabled:
            return False

        if self._permission == NotificationPermission.DEFAULT:
            self.request_permission()
        if self._permission != NotificationPermission.GRANTED:
            return False

        payload = NotificationPayload(
            title=self.config.title,
            message=self.config.message,
            phase=phase,
            created_at=datetime.now(),
        )
        return self._dispatch(payload)

    def notify_custom(self, title: str, message: str) -> bool:
        """Send a custom notification regardless of the enabled flag.

        Args:
            title: Notification title.
            message: Notification body.

        Returns:
            True if sent successfully.
        """
        if self._command is None:
            self._command = self._find_command()
        if self._command is None:
            return False
        return self._send(NotificationPayload(title=title, message=message))

    def _dispatch(self, payload: NotificationPayload) -> bool:
        self._last_notification = payload.created_at
        if not self._background:
            return self._send(payload)

        thread = threading.Thread(target=self._send, args=(payload,), daemon=True)
        thread.start()
        return True

    def _find_command(self) -> str | None:
        for command in NOTIFIER_COMMANDS:
            if shutil.which(command):
                return command
        return None

    def build_command(self, payload: NotificationPayload) -> list[str]:
        """Build the notifier command line for a payload."""
        command = self._command or NOTIFIER_COMMANDS[0]
        if command == "notify-send":
            return ["notify-send", payload.title, payload.message]

        cmd = [
            "terminal-notifier",
            "-title",
            payload.title,
            "-message",
            payload.message,
        ]
        if self.config.sound:
            cmd.extend(["-sound", "default"])
        return cmd

    def _send(self, payload: NotificationPayload) -> bool:
        """Run the notifier.

        Args:
            payload: The notification payload.

        Returns:
            True if sent successfully.
        """
        try:
            result = subprocess.run(
                self.build_command(payload),
                capture_output=True,
                text=True,
                timeout=5,
            )

            if result.returncode != 0:
                logger.warning(f"Notification error: {result.stderr}")
                return False

            logger.debug(f"Notification sent: {payload.title}")
            return True

        except FileNotFoundError:
            logger.warning(
                "terminal-notifier not found. Install with: brew install terminal-notifier"
            )
            return False
        except subprocess.TimeoutExpired:
            logger.warning("Notification timed out")
            return False
        except Exception as e:
            logger.error(f"Notification exception: {e}")
            return False
