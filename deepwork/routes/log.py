"""Activity log routes for Deep Work Terminal."""

from flask import Blueprint, current_app, jsonify

from deepwork.services.session_controller import SessionController

log_bp = Blueprint("log", __name__)


def _get_controller() -> SessionController:
    """Get the session controller from app extensions."""
    return current_app.extensions["controller"]


@log_bp.route("/log", methods=["GET"])
def get_log():
    """Get the activity log, oldest entry first.

    Returns:
        JSON object with:
        - entries: List of {id, timestamp, message, kind}
        - capacity: Maximum number of entries kept
    """
    log = _get_controller().log
    return jsonify(
        {
            "entries": [e.model_dump(mode="json") for e in log.entries()],
            "capacity": log.capacity,
        }
    )
