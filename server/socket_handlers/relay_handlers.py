"""Socket.IO handlers that relay data between the members of a room.

Payloads are forwarded untouched. Events from connections that are not
members of the named room are dropped without telling anyone: they are
expected while joins and departures race each other.
"""

import logging
from flask import request, current_app
from flask_socketio import emit

logger = logging.getLogger(__name__)


def register_handlers(socketio):
    """Register relay Socket.IO event handlers."""

    @socketio.on('gymote-data')
    def handle_gymote_data(room_id=None, data=None):
        """Forward a remote's sensor buffer to the screen, tagged with its player slot."""
        room_controller = current_app.extensions['room_controller']
        route = room_controller.telemetry_route(request.sid, room_id)
        if route is None:
            logger.debug("gymote_data_dropped sid=%s room=%s", request.sid, room_id)
            return
        player_slot, screen_sid = route
        emit('gymote-data', {'playerId': player_slot, 'data': data}, to=screen_sid)

    @socketio.on('screen-info')
    def handle_screen_info(room_id=None, screen_info=None):
        """Forward the screen's viewport metadata to every remote."""
        room_controller = current_app.extensions['room_controller']
        targets = room_controller.screen_info_targets(request.sid, room_id)
        if not targets:
            logger.debug("screen_info_dropped sid=%s room=%s", request.sid, room_id)
            return
        for sid in targets:
            emit('screen-info', screen_info, to=sid)

    @socketio.on('score-update')
    def handle_score_update(room_id=None, scores=None):
        room_controller = current_app.extensions['room_controller']
        for sid in room_controller.peers(request.sid, room_id):
            emit('score-update', scores, to=sid)
