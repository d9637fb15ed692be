"""Task routes for Deep Work Terminal.

New tasks are added through POST /api/command; these endpoints list,
toggle and delete them.
"""

from flask import Blueprint, current_app, jsonify

from deepwork.services.session_controller import SessionController

tasks_bp = Blueprint("tasks", __name__)


def _get_controller() -> SessionController:
    """Get the session controller from app extensions."""
    return current_app.extensions["controller"]


@tasks_bp.route("/tasks", methods=["GET"])
def list_tasks():
    """List all tasks in insertion order."""
    tasks = _get_controller().tasks.list_tasks()
    return jsonify({"tasks": [t.model_dump() for t in tasks]})


@tasks_bp.route("/tasks/<int:task_id>/toggle", methods=["POST"])
def toggle_task(task_id: int):
    """Flip a task's completed flag.

    Returns:
        The updated task, or 404 if no task has that id.
    """
    task = _get_controller().toggle_task(task_id)
    if task is None:
        return jsonify({"error": "Task not found"}), 404
    return jsonify(task.model_dump())


@tasks_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int):
    """Delete a task."""
    if not _get_controller().delete_task(task_id):
        return jsonify({"error": "Task not found"}), 404
    return jsonify({"status": "deleted", "id": task_id})
