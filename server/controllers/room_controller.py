"""Room membership and relay routing.

The controller applies join/leave transitions to the registry and works out
who must be told about them, but never talks to the transport itself. The
Socket.IO handlers turn the returned results into emits once the registry
lock has been released.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from server.models.room_registry import REMOTE, SCREEN, RemoteSlot, Room, RoomRegistry
from server.utils.validation import validate_device_type, validate_room_id

logger = logging.getLogger(__name__)

MAX_ROOM_ID_ATTEMPTS = 100


@dataclass
class LeaveResult:
    room_id: str
    connection_id: str
    role: str
    # Members still connected to the room, to be notified of the departure
    recipients: List[str]
    room_closed: bool
    player_slot: Optional[int] = None
    roster: Optional[Dict[str, Any]] = None

    def player_disconnected_payload(self) -> Dict[str, Any]:
        return {'playerId': self.player_slot, **(self.roster or {})}


@dataclass
class JoinResult:
    room_id: str
    device_type: str
    accepted: bool
    player_slot: Optional[int] = None
    # Recipients of devices-connected; empty when no broadcast is due
    recipients: List[str] = field(default_factory=list)
    roster: Optional[Dict[str, Any]] = None
    # Membership the connection held elsewhere before this join
    departure: Optional[LeaveResult] = None


class RoomController:
    def __init__(self, room_registry: RoomRegistry, room_id_prefix: str = "room",
                 room_id_digits: int = 4):
        self.room_registry = room_registry
        self.room_id_prefix = room_id_prefix
        self.room_id_digits = room_id_digits

    # Join ----------------------------------------------------------------

    def join(self, connection_id: str, room_id: str, device_type: str) -> JoinResult:
        """Add ``connection_id`` to ``room_id`` as a screen or a remote.

        Raises RoomRequestError for a malformed room id or device type.
        A third remote is rejected (``accepted=False``) without touching
        the room, and so is a repeated join from a remote once two remotes
        are present.
        """
        validate_room_id(room_id)
        validate_device_type(device_type)

        registry = self.room_registry
        with registry.lock:
            departure = None
            current_room_id = registry.room_of(connection_id)
            if current_room_id is not None:
                current = registry.get(current_room_id)
                if current_room_id == room_id and current is not None \
                        and _role_in(current, connection_id) == device_type:
                    return self._rejoin(current, connection_id, device_type)
                departure = self._leave(connection_id)

            room = registry.get_or_create(room_id)
            if device_type == SCREEN:
                result = self._join_screen(room, connection_id)
            else:
                result = self._join_remote(room, connection_id)
            result.departure = departure
            if result.accepted:
                self._attach_roster(room, result)
            return result

    def _join_screen(self, room: Room, connection_id: str) -> JoinResult:
        displaced = room.screen
        if displaced is not None:
            # The previous screen is not notified; it simply stops receiving.
            logger.warning("screen_replaced room=%s old_sid=%s new_sid=%s",
                           room.room_id, displaced, connection_id)
            self.room_registry.unbind(displaced)
        room.screen = connection_id
        self.room_registry.bind(connection_id, room.room_id)
        logger.info("screen_joined room=%s sid=%s", room.room_id, connection_id)
        return JoinResult(room.room_id, SCREEN, accepted=True)

    def _join_remote(self, room: Room, connection_id: str) -> JoinResult:
        if room.is_full:
            logger.info("room_full room=%s sid=%s", room.room_id, connection_id)
            return JoinResult(room.room_id, REMOTE, accepted=False)

        slot = room.next_free_slot()
        room.remotes.append(RemoteSlot(connection_id, slot))
        self.room_registry.bind(connection_id, room.room_id)
        logger.info("remote_joined room=%s sid=%s player=%d", room.room_id, connection_id, slot)
        return JoinResult(room.room_id, REMOTE, accepted=True, player_slot=slot)

    def _rejoin(self, room: Room, connection_id: str, device_type: str) -> JoinResult:
        if device_type == REMOTE and room.is_full:
            logger.info("room_full room=%s sid=%s rejoin=true", room.room_id, connection_id)
            return JoinResult(room.room_id, REMOTE, accepted=False)
        logger.info("member_rejoined room=%s sid=%s device=%s",
                    room.room_id, connection_id, device_type)
        result = JoinResult(room.room_id, device_type, accepted=True,
                            player_slot=room.slot_of(connection_id))
        self._attach_roster(room, result)
        return result

    @staticmethod
    def _attach_roster(room: Room, result: JoinResult) -> None:
        if room.screen is not None and room.remotes:
            result.recipients = room.members()
            result.roster = room.roster()
            logger.info("room_devices_connected room=%s players=%s", room.room_id, room.players)

    # Leave ---------------------------------------------------------------

    def leave(self, connection_id: str) -> Optional[LeaveResult]:
        """Remove ``connection_id`` from whichever room holds it.

        Returns None when the connection is not in any room.
        """
        with self.room_registry.lock:
            return self._leave(connection_id)

    def _leave(self, connection_id: str) -> Optional[LeaveResult]:
        registry = self.room_registry
        room_id = registry.room_of(connection_id)
        if room_id is None:
            logger.debug("leave_without_room sid=%s", connection_id)
            return None

        room = registry.get(room_id)
        if room is None:
            registry.unbind(connection_id)
            return None

        if room.screen == connection_id:
            # Losing the screen ends the session for everyone in the room.
            room.screen = None
            recipients = room.members()
            registry.discard(room_id)
            registry.unbind(connection_id)
            logger.info("screen_left room=%s sid=%s remaining=%d",
                        room_id, connection_id, len(recipients))
            return LeaveResult(room_id, connection_id, SCREEN, recipients, room_closed=True)

        slot = room.slot_of(connection_id)
        registry.unbind(connection_id)
        if slot is None:
            return None
        room.remotes = [r for r in room.remotes if r.connection_id != connection_id]
        recipients = room.members()
        closed = registry.delete_if_empty(room_id)
        logger.info("remote_left room=%s sid=%s player=%d remaining=%d",
                    room_id, connection_id, slot, len(recipients))
        return LeaveResult(room_id, connection_id, REMOTE, recipients, room_closed=closed,
                           player_slot=slot, roster=room.roster())

    # Relay routing -------------------------------------------------------

    def telemetry_route(self, connection_id: str, room_id) -> Optional[Tuple[int, str]]:
        """Return ``(player_slot, screen_sid)`` for telemetry from a remote.

        None when the sender is not a remote of that room or no screen is
        present to receive it.
        """
        with self.room_registry.lock:
            room = self._lookup(room_id)
            if room is None or room.screen is None:
                return None
            slot = room.slot_of(connection_id)
            if slot is None:
                return None
            return slot, room.screen

    def screen_info_targets(self, connection_id: str, room_id) -> List[str]:
        """Remotes that should receive metadata sent by the room's screen."""
        with self.room_registry.lock:
            room = self._lookup(room_id)
            if room is None or room.screen != connection_id:
                return []
            return room.remote_ids()

    def peers(self, connection_id: str, room_id) -> List[str]:
        """Every other member of the room, if the sender is a member."""
        with self.room_registry.lock:
            room = self._lookup(room_id)
            if room is None:
                return []
            members = room.members()
            if connection_id not in members:
                return []
            return [member for member in members if member != connection_id]

    def _lookup(self, room_id) -> Optional[Room]:
        if not isinstance(room_id, str):
            return None
        return self.room_registry.get(room_id)

    # Queries -------------------------------------------------------------

    def get_room(self, room_id: str) -> Optional[Dict[str, Any]]:
        with self.room_registry.lock:
            room = self.room_registry.get(room_id)
            return room.to_dict() if room else None

    def room_count(self) -> int:
        return len(self.room_registry)

    def generate_room_id(self) -> str:
        """Pick a random id of the form ``<prefix><number>`` not currently in use."""
        upper = 10 ** self.room_id_digits
        for _ in range(MAX_ROOM_ID_ATTEMPTS):
            candidate = f"{self.room_id_prefix}{random.randrange(upper)}"
            if candidate not in self.room_registry:
                return candidate
        raise RuntimeError("No free room id available")


def _role_in(room: Room, connection_id: str) -> Optional[str]:
    if room.screen == connection_id:
        return SCREEN
    if room.slot_of(connection_id) is not None:
        return REMOTE
    return None
