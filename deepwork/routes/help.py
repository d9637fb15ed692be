"""Help routes for Deep Work Terminal.

The help surface is opened with the /help command and closed here.
"""

from flask import Blueprint, current_app, jsonify

from deepwork.services.command_interpreter import COMMAND_HELP
from deepwork.services.session_controller import SessionController

help_bp = Blueprint("help", __name__)


def _get_controller() -> SessionController:
    """Get the session controller from app extensions."""
    return current_app.extensions["controller"]


@help_bp.route("/help", methods=["GET"])
def get_help():
    """Get the command reference and whether the help surface is open.

    Returns:
        JSON object with:
        - visible: Whether the help surface is shown
        - commands: List of {usage, description}
    """
    return jsonify(
        {
            "visible": _get_controller().help_visible,
            "commands": [
                {"usage": usage, "description": description}
                for usage, description in COMMAND_HELP
            ],
        }
    )


@help_bp.route("/help/close", methods=["POST"])
def close_help():
    """Hide the help surface."""
    controller = _get_controller()
    controller.close_help()
    return jsonify({"visible": controller.help_visible})
