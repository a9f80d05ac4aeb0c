"""Socket.IO handlers for room membership.

Membership changes are applied through the RoomController; these handlers
only translate its results into events for the affected connections.
"""

import logging
from flask import request, current_app
from flask_socketio import emit

from server.models.room_registry import SCREEN
from server.utils.validation import RoomRequestError

logger = logging.getLogger(__name__)


def announce_departure(result):
    """Notify the members left behind by a screen or remote departure."""
    if result.role == SCREEN:
        for sid in result.recipients:
            emit('device-disconnected', to=sid)
    else:
        payload = result.player_disconnected_payload()
        for sid in result.recipients:
            emit('player-disconnected', payload, to=sid)


def register_handlers(socketio):
    """Register room-related Socket.IO event handlers."""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle client connection."""
        logger.info("client_connected sid=%s", request.sid)
        emit('connected', {'sid': request.sid})

    @socketio.on('join-room')
    def handle_join_room(room_id=None, device_type=None):
        """Join a room as its screen or as one of its two remotes.

        Emitted by clients as ``join-room(roomId, deviceType)`` where
        deviceType is ``"screen"`` or ``"remote"``.
        """
        room_controller = current_app.extensions['room_controller']
        try:
            result = room_controller.join(request.sid, room_id, device_type)
        except RoomRequestError as e:
            emit('error', {'message': str(e), 'code': e.code})
            return

        if result.departure is not None:
            announce_departure(result.departure)

        if not result.accepted:
            emit('room-full')
            return

        if result.player_slot is not None:
            emit('player-assigned', result.player_slot)

        for sid in result.recipients:
            emit('devices-connected', result.roster, to=sid)

    @socketio.on('leave-room')
    def handle_leave_room(room_id=None):
        """Leave the current room without closing the connection."""
        room_controller = current_app.extensions['room_controller']
        result = room_controller.leave(request.sid)
        if result is None:
            return
        if room_id is not None and room_id != result.room_id:
            logger.debug("leave_room_mismatch sid=%s requested=%s actual=%s",
                         request.sid, room_id, result.room_id)
        announce_departure(result)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Clean up whichever room the closed connection belonged to."""
        room_controller = current_app.extensions['room_controller']
        result = room_controller.leave(request.sid)
        if result is None:
            logger.info("client_disconnected sid=%s", request.sid)
            return
        logger.info("member_disconnected sid=%s room=%s role=%s",
                    request.sid, result.room_id, result.role)
        announce_departure(result)
