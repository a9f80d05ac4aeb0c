"""WebSocket server application - screen/remote room relay.

This module provides the Flask-SocketIO application that pairs a screen
with up to two phone remotes. All room state lives in an in-process
RoomRegistry owned by the app:
1. Socket.IO events join/leave rooms and relay data between members
2. HTTP routes hand out room ids and join links
3. Room state is never persisted; a restart starts with no rooms

Architecture:
    Remote (phone) → Socket.IO → RoomRegistry → Socket.IO → Screen

NOTE: Eventlet monkey patching is done in wsgi.py entry point
"""

import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics

from common.utils.config import Settings, settings
from common.utils.network_utils import get_lan_address
from server import __version__
from server.controllers.room_controller import RoomController
from server.models.room_registry import RoomRegistry

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize SocketIO globally for handler access
socketio = SocketIO()


def create_app(config: Settings | None = None):
    """Application factory for the relay server."""
    config = config or settings
    app = Flask(__name__)
    app.config['DEBUG'] = config.debug

    # Configure CORS
    CORS(app, resources={
        r"/api/*": {
            "origins": config.websocket_cors_origins,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    # Single process, in-memory rooms: no message queue
    socketio.init_app(
        app,
        cors_allowed_origins=config.websocket_cors_origins,
        async_mode=config.websocket_async_mode,
        message_queue=None,
        ping_interval=config.websocket_ping_interval,
        ping_timeout=config.websocket_ping_timeout,
        logger=config.debug,
        engineio_logger=config.debug
    )

    # Each app gets its own collector registry so factories can be called repeatedly
    metrics = PrometheusMetrics(app, registry=CollectorRegistry(auto_describe=True))
    metrics.info("gymote_relay_server_info", "Gymote relay server", version=__version__)

    # Initialize services
    room_registry = RoomRegistry()
    room_controller = RoomController(
        room_registry,
        room_id_prefix=config.room_id_prefix,
        room_id_digits=config.room_id_digits,
    )

    # Store dependencies in app.extensions
    app.extensions['settings'] = config
    app.extensions['room_registry'] = room_registry
    app.extensions['room_controller'] = room_controller
    app.extensions['socketio'] = socketio

    # Register HTTP routes
    from server.routes.health_routes import init_health_routes
    from server.routes.room_routes import init_room_routes
    app.register_blueprint(init_health_routes())
    app.register_blueprint(init_room_routes(room_controller, config))

    # Register Socket.IO event handlers
    from server.socket_handlers import room_handlers, relay_handlers, error_handlers
    room_handlers.register_handlers(socketio)
    relay_handlers.register_handlers(socketio)
    error_handlers.register_handlers(socketio)

    logger.info("relay_server_initialized async_mode=%s", config.websocket_async_mode)
    return app


def log_startup_banner(config: Settings):
    """Log where the screen and the phone should point their browsers."""
    lan_address = get_lan_address() or "localhost"
    remote_path = "/" + config.remote_path.lstrip("/")
    logger.info("=" * 60)
    logger.info("Gymote relay server running on:")
    logger.info("  Local:    http://localhost:%s", config.port)
    logger.info("  Network:  http://%s:%s", lan_address, config.port)
    logger.info("Screen (computer): http://%s:%s", lan_address, config.port)
    logger.info("Remote (phone):    http://%s:%s%s", lan_address, config.port, remote_path)
    logger.info("Phone and computer must be on the same network")
    logger.info("=" * 60)


def main():
    app = create_app()
    log_startup_banner(settings)
    socketio.run(app, host=settings.host, port=settings.port)


if __name__ == '__main__':
    main()
