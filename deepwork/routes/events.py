"""Event routes for Deep Work Terminal.

Provides Server-Sent Events (SSE) endpoint for real-time updates.
"""

from flask import Blueprint, Response

from deepwork.services.event_bus import get_event_bus

events_bp = Blueprint("events", __name__)


@events_bp.route("/events")
def sse_events():
    """Server-Sent Events endpoint for real-time updates.

    Clients receive:
    - state_changed: Full snapshot after every operation and tick
    - log_appended: A new activity log entry
    - log_cleared: The log was cleared with /clear
    - phase_completed: A phase ended by clock or skip

    Returns:
        SSE stream with events in format:
        event: <event_type>
        data: <json_payload>
    """
    event_bus = get_event_bus()

    def generate():
        """Generate SSE events from the event bus."""
        yield from event_bus.get_sse_stream()

    return Response(
        generate(),
        mimetype="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
