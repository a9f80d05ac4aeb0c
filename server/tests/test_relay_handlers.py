"""Tests for relaying telemetry, screen metadata and scores."""

import pytest


def _events(sio_client, name=None):
    received = sio_client.get_received()
    return [(e['name'], e['args']) for e in received if name is None or e['name'] == name]


@pytest.fixture
def full_room(connect):
    """A room 'R1' with a screen and two remotes, event queues drained."""
    screen, first, second = connect(), connect(), connect()
    screen.emit('join-room', 'R1', 'screen')
    first.emit('join-room', 'R1', 'remote')
    second.emit('join-room', 'R1', 'remote')
    for sio_client in (screen, first, second):
        sio_client.get_received()
    return screen, first, second


def test_telemetry_reaches_only_the_screen_tagged_with_player(full_room):
    screen, first, second = full_room

    first.emit('gymote-data', 'R1', [1, 2, 3, 4])
    second.emit('gymote-data', 'R1', [9, 8])

    assert _events(screen) == [
        ('gymote-data', [{'playerId': 1, 'data': [1, 2, 3, 4]}]),
        ('gymote-data', [{'playerId': 2, 'data': [9, 8]}]),
    ]
    assert _events(first) == []
    assert _events(second) == []


def test_binary_telemetry_is_forwarded_unmodified(full_room):
    screen, first, _ = full_room
    buffer = bytes([0, 255, 17, 42])

    first.emit('gymote-data', 'R1', buffer)

    [(name, args)] = _events(screen)
    assert name == 'gymote-data'
    assert args[0]['playerId'] == 1
    assert args[0]['data'] == buffer


def test_telemetry_from_non_member_is_dropped(full_room, connect):
    screen, _, _ = full_room
    outsider = connect()

    outsider.emit('gymote-data', 'R1', [1, 2])
    outsider.emit('gymote-data', 'nowhere', [1, 2])

    assert _events(screen) == []
    assert _events(outsider) == []


def test_screen_info_goes_to_every_remote_but_not_back(full_room):
    screen, first, second = full_room
    info = {'width': 1920, 'height': 1080, 'distance': 250}

    screen.emit('screen-info', 'R1', info)

    assert _events(first) == [('screen-info', [info])]
    assert _events(second) == [('screen-info', [info])]
    assert _events(screen) == []


def test_screen_info_from_remote_is_dropped(full_room):
    screen, first, second = full_room

    first.emit('screen-info', 'R1', {'width': 1, 'height': 1, 'distance': 1})

    assert _events(screen) == []
    assert _events(second) == []


def test_score_update_reaches_other_members(full_room):
    screen, first, second = full_room
    scores = {'1': 3, '2': 5}

    screen.emit('score-update', 'R1', scores)

    assert _events(first) == [('score-update', [scores])]
    assert _events(second) == [('score-update', [scores])]
    assert _events(screen) == []
