"""In-memory registry of screen/remote rooms.

A room pairs at most one screen with at most two remotes. The registry
owns every Room record and keeps a reverse index from connection id to
room id so a disconnect (which carries no room context) can be resolved
without scanning every room.

Multi-step transitions (check capacity, then add a remote) must run while
holding ``registry.lock``; the individual methods lock as well so single
reads are consistent on their own.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

SCREEN = "screen"
REMOTE = "remote"
DEVICE_TYPES = (SCREEN, REMOTE)

MAX_REMOTES = 2
PLAYER_SLOTS = (1, 2)


@dataclass
class RemoteSlot:
    """A remote connection and the player slot it holds."""

    connection_id: str
    player_slot: int


@dataclass
class Room:
    room_id: str
    screen: Optional[str] = None
    remotes: List[RemoteSlot] = field(default_factory=list)

    @property
    def players(self) -> List[int]:
        return sorted(remote.player_slot for remote in self.remotes)

    @property
    def is_full(self) -> bool:
        return len(self.remotes) >= MAX_REMOTES

    @property
    def is_empty(self) -> bool:
        return self.screen is None and not self.remotes

    def members(self) -> List[str]:
        """Connection ids of every member, screen first."""
        ids = [self.screen] if self.screen else []
        ids.extend(remote.connection_id for remote in self.remotes)
        return ids

    def remote_ids(self) -> List[str]:
        return [remote.connection_id for remote in self.remotes]

    def slot_of(self, connection_id: str) -> Optional[int]:
        for remote in self.remotes:
            if remote.connection_id == connection_id:
                return remote.player_slot
        return None

    def next_free_slot(self) -> Optional[int]:
        """Lowest player slot not held by a current remote."""
        taken = {remote.player_slot for remote in self.remotes}
        for slot in PLAYER_SLOTS:
            if slot not in taken:
                return slot
        return None

    def roster(self) -> Dict[str, object]:
        """Payload describing the connected players, as sent to clients."""
        return {
            'playersConnected': len(self.remotes),
            'players': self.players,
        }

    def to_dict(self) -> Dict[str, object]:
        return {
            'room_id': self.room_id,
            'screen_connected': self.screen is not None,
            'players_connected': len(self.remotes),
            'players': self.players,
        }


class RoomRegistry:
    """Process-wide mapping of room id to Room, plus the reverse index."""

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._membership: Dict[str, str] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        with self.lock:
            return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        with self.lock:
            return room_id in self._rooms

    def get(self, room_id: str) -> Optional[Room]:
        with self.lock:
            return self._rooms.get(room_id)

    def get_or_create(self, room_id: str) -> Room:
        with self.lock:
            room = self._rooms.get(room_id)
            if room is None:
                room = Room(room_id=room_id)
                self._rooms[room_id] = room
                logger.info("room_created room=%s", room_id)
            return room

    def delete_if_empty(self, room_id: str) -> bool:
        """Remove the room iff it has neither a screen nor remotes."""
        with self.lock:
            room = self._rooms.get(room_id)
            if room is None or not room.is_empty:
                return False
            del self._rooms[room_id]
            logger.info("room_deleted room=%s", room_id)
            return True

    def discard(self, room_id: str) -> Optional[Room]:
        """Remove the room regardless of membership and unbind its members."""
        with self.lock:
            room = self._rooms.pop(room_id, None)
            if room is None:
                return None
            for connection_id in room.members():
                self.unbind(connection_id)
            logger.info("room_discarded room=%s", room_id)
            return room

    # Reverse index -------------------------------------------------------

    def room_of(self, connection_id: str) -> Optional[str]:
        with self.lock:
            return self._membership.get(connection_id)

    def bind(self, connection_id: str, room_id: str) -> None:
        with self.lock:
            self._membership[connection_id] = room_id

    def unbind(self, connection_id: str) -> None:
        with self.lock:
            self._membership.pop(connection_id, None)
