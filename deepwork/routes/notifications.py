"""Notification routes for Deep Work Terminal.

Provides REST API endpoints for notification management:
- Get notification settings
- Update notification settings
- Send test notification
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from deepwork.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

notifications_bp = Blueprint("notifications", __name__)


def _get_notification_service() -> NotificationService:
    """Get the notification service from app extensions."""
    return current_app.extensions["notification_service"]


@notifications_bp.route("/notifications", methods=["GET"])
def get_notification_settings():
    """Get current notification settings.

    Returns:
        JSON object with:
        - enabled: Whether notifications are enabled
        - permission: default, granted or denied
    """
    service = _get_notification_service()

    return jsonify(
        {
            "enabled": service.enabled,
            "permission": service.permission.value,
        }
    )


@notifications_bp.route("/notifications", methods=["POST"])
def update_notification_settings():
    """Update notification settings.

    Request body:
        {
            "enabled": true/false
        }

    Returns:
        JSON object with updated settings.
    """
    data = request.get_json(silent=True) or {}
    enabled = data.get("enabled")

    if enabled is None:
        return jsonify({"error": "'enabled' field is required"}), 400

    service = _get_notification_service()
    service.enabled = bool(enabled)

    return jsonify(
        {
            "enabled": service.enabled,
            "permission": service.permission.value,
        }
    )


@notifications_bp.route("/notifications/test", methods=["POST"])
def send_test_notification():
    """Send a test notification.

    Request body (optional):
        {
            "title": "Custom title",
            "message": "Custom message"
        }

    Returns:
        JSON object with status.
    """
    data = request.get_json(silent=True) or {}
    service = _get_notification_service()

    success = service.notify_custom(
        title=data.get("title") or service.config.title,
        message=data.get("message") or service.config.message,
    )

    if success:
        return jsonify({"status": "sent"})
    return jsonify(
        {"error": "Failed to send notification. Is terminal-notifier installed?"}
    ), 500
