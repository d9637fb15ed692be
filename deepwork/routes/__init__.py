"""Flask routes for Deep Work Terminal."""

from deepwork.routes.events import events_bp
from deepwork.routes.help import help_bp
from deepwork.routes.log import log_bp
from deepwork.routes.notifications import notifications_bp
from deepwork.routes.session import session_bp
from deepwork.routes.settings import settings_bp
from deepwork.routes.tasks import tasks_bp

__all__ = [
    "events_bp",
    "help_bp",
    "log_bp",
    "notifications_bp",
    "session_bp",
    "settings_bp",
    "tasks_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app.

    Args:
        app: The Flask application instance.
    """
    app.register_blueprint(events_bp, url_prefix="/api")
    app.register_blueprint(help_bp, url_prefix="/api")
    app.register_blueprint(log_bp, url_prefix="/api")
    app.register_blueprint(notifications_bp, url_prefix="/api")
    app.register_blueprint(session_bp, url_prefix="/api")
    app.register_blueprint(settings_bp, url_prefix="/api")
    app.register_blueprint(tasks_bp, url_prefix="/api")
