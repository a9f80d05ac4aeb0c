"""Validation helpers for room join requests."""

import logging

from server.models.room_registry import DEVICE_TYPES

logger = logging.getLogger(__name__)

MAX_ROOM_ID_LENGTH = 128


class RoomRequestError(ValueError):
    """Rejected room request; ``code`` is sent back to the client."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


def validate_room_id(room_id):
    """Room ids are opaque client strings; only emptiness and size are checked."""

    if not isinstance(room_id, str) or not room_id:
        logger.warning("invalid_room_id value=%r", room_id)
        raise RoomRequestError("Room id required", "INVALID_ROOM")
    if len(room_id) > MAX_ROOM_ID_LENGTH:
        logger.warning("room_id_too_long length=%d", len(room_id))
        raise RoomRequestError(
            f"Room id must be at most {MAX_ROOM_ID_LENGTH} characters", "INVALID_ROOM"
        )
    return room_id


def validate_device_type(device_type):
    if device_type not in DEVICE_TYPES:
        logger.warning("invalid_device_type value=%r", device_type)
        raise RoomRequestError(
            f"Device type must be one of {DEVICE_TYPES}", "INVALID_DEVICE_TYPE"
        )
    return device_type
