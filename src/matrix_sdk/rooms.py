"""Tracker for the rooms the client is joined to."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from matrix_sdk.errors import MatrixRequestError
from matrix_sdk.models.events import RoomEvent
from matrix_sdk.room import Room

if TYPE_CHECKING:
    from matrix_sdk.client import Client

log = logging.getLogger(__name__)

MEGOLM_ALGORITHM = "m.megolm.v1.aes-sha2"


class RoomStore:
    """Owns the joined-room collection of one client.

    Invited and left rooms are never stored here; a room ID is either
    tracked as joined or not tracked at all.
    """

    def __init__(self, client: Client) -> None:
        self._client = client
        self._rooms: dict[str, Room] = {}

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __iter__(self) -> Iterator[str]:
        return iter(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)

    def get(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    @property
    def view(self) -> Mapping[str, Room]:
        """Read-only live view of the tracked rooms."""
        return MappingProxyType(self._rooms)

    async def ensure_room(self, room_id: str) -> Room:
        """Return the tracked room, creating and registering it if needed.

        With encryption enabled a new room is checked for ``m.room.encryption``;
        a 404 means the room is not encrypted, other errors propagate and the
        room is not registered.
        """
        room = self._rooms.get(room_id)
        if room is not None:
            return room

        room = Room(self._client, room_id)
        if self._client.encryption:
            try:
                event = await self._client.room_api.get_state_event(
                    room_id, "m.room.encryption"
                )
            except MatrixRequestError as exc:
                if exc.status != 404:
                    raise
            else:
                if event.get("algorithm") == MEGOLM_ALGORITHM:
                    room.enable_encryption()
        self._rooms[room_id] = room
        log.debug("Tracking room %s", room_id)
        return room

    async def apply_state_event(self, room: Room, event: RoomEvent) -> None:
        await room.process_state_event(event)

    def remove_room(self, room_id: str) -> Room | None:
        """Stop tracking a room.

        Members drop their back-reference to it; users left in no tracked
        room are removed from :attr:`Client.users`.
        """
        room = self._rooms.pop(room_id, None)
        if room is None:
            return None
        users = self._client.users
        for user in room.members:
            user.rooms.discard(room_id)
            if not user.rooms and users.get(user.user_id) is user:
                del users[user.user_id]
        log.debug("Stopped tracking room %s", room_id)
        return room
