"""Session routes for Deep Work Terminal.

Provides REST API endpoints for the timer and the input line:
- GET /api/session - Full terminal snapshot
- POST /api/session/toggle - Start or pause
- POST /api/session/reset - Refill the current phase
- POST /api/session/skip - Complete the current phase now
- POST /api/command - Submit one input line
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from deepwork.services.session_controller import SessionController

logger = logging.getLogger(__name__)

session_bp = Blueprint("session", __name__)


def _get_controller() -> SessionController:
    """Get the session controller from app extensions."""
    return current_app.extensions["controller"]


@session_bp.route("/session", methods=["GET"])
def get_session():
    """Get the full terminal snapshot.

    Returns:
        JSON object with session, settings, stats, identity, tasks, log,
        quote, ambience, volume and help_visible.
    """
    return jsonify(_get_controller().snapshot())


@session_bp.route("/session/toggle", methods=["POST"])
def toggle_session():
    """Start or pause the timer.

    Returns:
        JSON object with:
        - changed: False when a finished phase could not be started
        - session: Updated session block
    """
    controller = _get_controller()
    changed = controller.toggle_running()
    return jsonify({"changed": changed, "session": controller.snapshot()["session"]})


@session_bp.route("/session/reset", methods=["POST"])
def reset_session():
    """Reset the current phase to its full duration."""
    controller = _get_controller()
    controller.reset()
    return jsonify({"session": controller.snapshot()["session"]})


@session_bp.route("/session/skip", methods=["POST"])
def skip_session():
    """Skip to the next phase, running the full completion pipeline.

    Returns:
        JSON object with the transition and the updated session block.
    """
    controller = _get_controller()
    transition = controller.skip()
    return jsonify(
        {
            "transition": {
                "from_phase": transition.from_phase.value,
                "to_phase": transition.to_phase.value,
                "trigger": transition.trigger.value,
                "xp_awarded": transition.xp_awarded,
                "level_up": transition.level_up,
            },
            "session": controller.snapshot()["session"],
        }
    )


@session_bp.route("/command", methods=["POST"])
def submit_command():
    """Submit one line of terminal input.

    Request body:
        {
            "input": "/add write report"
        }

    Returns:
        JSON object with the branch that handled the line and an empty
        "input" for the client to clear its field.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("input"), str):
        return jsonify({"error": "'input' field is required"}), 400

    result = _get_controller().submit(data["input"])
    return jsonify(
        {
            "kind": result.kind.value,
            "command": result.command,
            "argument": result.argument,
            "known": result.known,
            "task": result.task.model_dump() if result.task else None,
            "input": "",
        }
    )
