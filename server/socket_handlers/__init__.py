"""Socket.IO event handlers for the relay server.

These handlers manage real-time WebSocket communication:
1. Room membership (join, leave, disconnect cleanup)
2. Relaying telemetry, screen metadata and scores between room members
3. Logging and reporting unexpected handler failures
"""

from server.socket_handlers import room_handlers
from server.socket_handlers import relay_handlers
from server.socket_handlers import error_handlers

__all__ = ['room_handlers', 'relay_handlers', 'error_handlers']
