"""Catch-all error handling for Socket.IO events.

Validation problems are answered by the handlers themselves; anything
that escapes a handler ends up here, is logged and reported to the sender.
"""

import logging
from flask import request
from flask_socketio import emit

logger = logging.getLogger(__name__)


def register_handlers(socketio):
    """Register the default Socket.IO error handler."""

    @socketio.on_error_default
    def handle_socket_error(e):
        event = getattr(request, 'event', None) or {}
        logger.error("socket_handler_failed event=%s sid=%s error=%s",
                     event.get('message'), request.sid, e, exc_info=e)
        emit('error', {'message': 'Internal server error', 'code': 'SERVER_ERROR'})
