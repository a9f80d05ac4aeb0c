"""HTTP routes for creating room ids and sharing join links.

Rooms themselves are created lazily by the first ``join-room`` event;
these endpoints only hand out ids and report on live rooms.
"""

import logging
from flask import Blueprint, jsonify, request

from common.utils.network_utils import build_join_url
from server.utils.validation import RoomRequestError, validate_room_id

logger = logging.getLogger(__name__)


def init_room_routes(room_controller, settings):
    room_bp = Blueprint('rooms', __name__, url_prefix='/api')

    def _join_url(room_id):
        base_url = settings.public_base_url or request.host_url
        return build_join_url(base_url, settings.remote_path, room_id)

    @room_bp.route('/rooms', methods=['POST'])
    def create_room_id():
        """Hand out an unused room id for a new screen"""
        try:
            room_id = room_controller.generate_room_id()
        except RuntimeError as e:
            logger.error("room_id_generation_failed error=%s", e)
            return jsonify({'error': str(e)}), 503

        return jsonify({
            'room_id': room_id,
            'join_url': _join_url(room_id)
        }), 201

    @room_bp.route('/rooms/<room_id>/join-link', methods=['GET'])
    def get_join_link(room_id):
        """Link a phone opens to join the room as a remote (what the QR code encodes)"""
        try:
            validate_room_id(room_id)
        except RoomRequestError as e:
            return jsonify({'error': str(e)}), 400

        return jsonify({
            'room_id': room_id,
            'join_url': _join_url(room_id)
        }), 200

    @room_bp.route('/rooms/<room_id>', methods=['GET'])
    def get_room(room_id):
        room = room_controller.get_room(room_id)
        if not room:
            return jsonify({'error': 'Room not found'}), 404
        return jsonify({'room': room}), 200

    return room_bp
