"""Settings routes for Deep Work Terminal.

Provides REST API endpoints for the configuration panel:
- GET /api/settings - Current timer settings, username, ambience and volume
- POST /api/settings - Apply a settings-form submission
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from deepwork.services.session_controller import SessionController

logger = logging.getLogger(__name__)

settings_bp = Blueprint("settings", __name__)


def _get_controller() -> SessionController:
    """Get the session controller from app extensions."""
    return current_app.extensions["controller"]


def _settings_payload(controller) -> dict:
    snapshot = controller.snapshot()
    return {
        **snapshot["settings"],
        "username": snapshot["identity"]["username"],
        "ambience": snapshot["ambience"],
        "volume": snapshot["volume"],
    }


@settings_bp.route("/settings", methods=["GET"])
def get_settings():
    """Get the configuration panel values."""
    return jsonify(_settings_payload(_get_controller()))


@settings_bp.route("/settings", methods=["POST"])
def update_settings():
    """Apply a settings-form submission.

    Timer fields that are blank or unparseable become 0. Omitted fields
    keep their current value.

    Request body:
        {
            "work_minutes": 50,
            "short_break_minutes": "10",
            "long_break_minutes": 20,
            "cycles_before_long_break": 4,
            "username": "neo",
            "ambience": "RAIN",
            "volume": 0.3
        }

    Returns:
        JSON object with the updated values, or 400 on a bad body.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body is required"}), 400

    controller = _get_controller()
    try:
        controller.update_settings(data)
    except (TypeError, ValueError) as e:
        logger.warning(f"Rejected settings update: {e}")
        return jsonify({"error": str(e)}), 400

    return jsonify(_settings_payload(controller))
