"""Pytest configuration and fixtures for relay server tests."""

import pytest

from common.utils.config import Settings
from server.app import create_app, socketio

# Threading mode lets Flask-SocketIO test clients run without eventlet
TEST_ENV = {
    "WEBSOCKET_ASYNC_MODE": "threading",
    "PUBLIC_BASE_URL": "http://192.168.1.20:3001",
}


@pytest.fixture
def settings():
    return Settings.from_env(TEST_ENV)


@pytest.fixture
def app(settings):
    """Create a fresh application (and so a fresh, empty room registry)."""
    test_app = create_app(settings)
    test_app.config['TESTING'] = True
    return test_app


@pytest.fixture
def client(app):
    """Create HTTP test client."""
    return app.test_client()


@pytest.fixture
def room_registry(app):
    return app.extensions['room_registry']


@pytest.fixture
def connect(app):
    """Factory for connected Socket.IO test clients.

    The ``connected`` greeting is consumed and its sid stored on the
    client as ``client.sid``.
    """
    clients = []

    def _connect():
        sio_client = socketio.test_client(app)
        greeting = sio_client.get_received()
        sio_client.sid = greeting[0]['args'][0]['sid']
        clients.append(sio_client)
        return sio_client

    yield _connect

    for sio_client in clients:
        if sio_client.is_connected():
            sio_client.disconnect()
