"""Tests for validation module."""
import pytest

from server.utils.validation import (
    MAX_ROOM_ID_LENGTH,
    RoomRequestError,
    validate_device_type,
    validate_room_id,
)


def test_validate_room_id():
    """Any non-empty string up to the limit is a valid room id."""
    assert validate_room_id("room4821") == "room4821"
    assert validate_room_id("x" * MAX_ROOM_ID_LENGTH)


def test_validate_room_id_invalid():
    for value in ("", None, 42, ["R1"], "x" * (MAX_ROOM_ID_LENGTH + 1)):
        with pytest.raises(RoomRequestError) as excinfo:
            validate_room_id(value)
        assert excinfo.value.code == "INVALID_ROOM"


def test_validate_device_type():
    assert validate_device_type("screen") == "screen"
    assert validate_device_type("remote") == "remote"
    with pytest.raises(ValueError):
        validate_device_type("Screen")
