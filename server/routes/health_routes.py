"""Health check routes for the relay server."""

from flask import Blueprint, jsonify, current_app

from server import __version__

SERVICE_NAME = 'gymote-relay'


def init_health_routes():
    """Initialize health check routes."""
    health_bp = Blueprint('health', __name__)

    @health_bp.route('/api/health', methods=['GET'])
    def health_check():
        """Basic health check - always returns healthy if server is running."""
        return jsonify({
            'status': 'healthy',
            'service': SERVICE_NAME,
            'version': __version__
        }), 200

    @health_bp.route('/api/health/ready', methods=['GET'])
    def readiness_check():
        """Readiness check - the room registry is in-process, so report its size."""
        room_controller = current_app.extensions['room_controller']
        return jsonify({
            'status': 'ready',
            'service': SERVICE_NAME,
            'rooms': room_controller.room_count()
        }), 200

    return health_bp
