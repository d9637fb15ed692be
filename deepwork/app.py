"""Flask application factory for Deep Work Terminal.

This module creates and configures the Flask application, wiring together
the services:

- ConfigService: Configuration loading
- StateStore: Persistence of settings, stats, username and tasks
- EventBus: Real-time SSE event broadcasting
- NotificationService: Desktop notifications
- PlayerBackend: Alarm and ambience playback
- SessionController: The timer, interpreter, log and task list

Usage:
    from deepwork.app import create_app
    app = create_app()
    app.run(port=5060)
"""

import atexit
import logging

from flask import Flask, Response

from deepwork.backends.audio import PlayerBackend
from deepwork.backends.base import SilentAlarm, SilentAmbience
from deepwork.models import AppConfig
from deepwork.routes import register_blueprints
from deepwork.services import (
    EventBus,
    NotificationService,
    QuoteService,
    SessionController,
    StateStore,
    get_config_service,
    get_event_bus,
)
from deepwork.services.display import render_screen

logger = logging.getLogger(__name__)


def build_controller(
    config: AppConfig,
    event_bus: EventBus | None = None,
    notification_service: NotificationService | None = None,
) -> SessionController:
    """Create a SessionController with the backends selected by `config`.

    Args:
        config: Application configuration.
        event_bus: Where state changes are published.
        notification_service: Notifier to use. Built from config if omitted.

    Returns:
        A started SessionController (persisted state loaded, startup log written).
    """
    store = StateStore(data_dir=config.data_dir)

    if config.audio.enabled:
        player = PlayerBackend(config.audio, cache_dir=config.data_dir)
        alarm, ambience_player = player, player
    else:
        alarm, ambience_player = SilentAlarm(), SilentAmbience()

    if notification_service is None:
        notification_service = NotificationService(config.notifications)

    return SessionController(
        store=store,
        alarm=alarm,
        notifier=notification_service,
        ambience_player=ambience_player,
        quotes=QuoteService.from_file(config.quotes_file),
        event_bus=event_bus,
        tick_interval=config.tick_interval,
        volume=config.audio.volume,
    )


def create_app(config_path: str = "config.yaml") -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Configured Flask application.
    """
    # Load configuration
    config_service = get_config_service(config_path)
    config = config_service.get_config()

    app = Flask(__name__)
    app.config["TESTING"] = False

    # Store services on app for access in routes
    app.extensions["config"] = config
    app.extensions["config_service"] = config_service

    _init_services(app, config)

    register_blueprints(app)

    @app.route("/")
    def index():
        controller = app.extensions["controller"]
        return Response(render_screen(controller.snapshot()), mimetype="text/plain")

    return app


def _init_services(app: Flask, config: AppConfig) -> None:
    """Initialize all services and wire them together.

    Args:
        app: Flask application.
        config: Application configuration.
    """
    event_bus = get_event_bus()
    app.extensions["event_bus"] = event_bus

    notification_service = NotificationService(config.notifications)
    app.extensions["notification_service"] = notification_service

    controller = build_controller(
        config,
        event_bus=event_bus,
        notification_service=notification_service,
    )
    app.extensions["controller"] = controller

    logger.info("Services initialized")


def main():
    """Run the Flask application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = create_app()
    config = app.extensions.get("config")
    atexit.register(app.extensions["controller"].shutdown)

    port = config.port if config else 5060
    debug = config.debug if config else False

    logger.info(f"Starting Deep Work Terminal on port {port}")
    # The reloader would start a second controller with its own ticker
    app.run(host="0.0.0.0", port=port, debug=debug, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()
