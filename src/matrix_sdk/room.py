"""A joined room and the state accumulated for it from sync."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from matrix_sdk.listeners import Callback, ListenerKind, ListenerRegistry
from matrix_sdk.models.enums import CacheLevel, Membership
from matrix_sdk.models.events import EphemeralEvent, RoomEvent
from matrix_sdk.user import User

if TYPE_CHECKING:
    from matrix_sdk.client import Client

log = logging.getLogger(__name__)


class Room:
    """Local view of a room the client is joined to.

    Room-local listeners receive ``(room, event)``::

        room = await client.join_room("#matrix:matrix.org")
        room.add_listener(on_message, "m.room.message")
    """

    def __init__(self, client: Client, room_id: str, *, event_history_limit: int = 20) -> None:
        self.client = client
        self.room_id = room_id
        self.event_history_limit = event_history_limit
        self.prev_batch: str | None = None
        self.events: list[RoomEvent] = []
        self.state: dict[tuple[str, str], RoomEvent] = {}
        self.ephemeral: dict[str, EphemeralEvent] = {}
        self.typing: list[str] = []

        self.name: str | None = None
        self.topic: str | None = None
        self.canonical_alias: str | None = None
        self.aliases: list[str] = []
        self.invite_only: bool | None = None
        self.guest_access: bool | None = None
        self.encrypted = False

        self._members: dict[str, User] = {}
        self._listeners = ListenerRegistry()

    def __repr__(self) -> str:
        return f"<Room {self.room_id}>"

    # --- Listeners ---

    def add_listener(self, callback: Callback, event_type: str | None = None) -> str:
        return self._listeners.register(ListenerKind.EVENT, callback, event_type)

    def remove_listener(self, uid: str) -> None:
        self._listeners.unregister(ListenerKind.EVENT, uid)

    def add_ephemeral_listener(self, callback: Callback, event_type: str | None = None) -> str:
        return self._listeners.register(ListenerKind.EPHEMERAL, callback, event_type)

    def remove_ephemeral_listener(self, uid: str) -> None:
        self._listeners.unregister(ListenerKind.EPHEMERAL, uid)

    def add_state_listener(self, callback: Callback, event_type: str | None = None) -> str:
        return self._listeners.register(ListenerKind.STATE, callback, event_type)

    def remove_state_listener(self, uid: str) -> None:
        self._listeners.unregister(ListenerKind.STATE, uid)

    # --- Accessors ---

    @property
    def members(self) -> list[User]:
        return list(self._members.values())

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.canonical_alias:
            return self.canonical_alias
        if self.aliases:
            return self.aliases[0]
        return self.room_id

    def get_state(self, event_type: str, state_key: str = "") -> RoomEvent | None:
        return self.state.get((event_type, state_key))

    def enable_encryption(self) -> None:
        self.encrypted = True

    # --- Sync input ---

    async def put_event(self, event: RoomEvent) -> None:
        self.events.append(event)
        if len(self.events) > self.event_history_limit:
            del self.events[: len(self.events) - self.event_history_limit]
        await self._listeners.dispatch(ListenerKind.EVENT, self, event, event_type=event.type)

    async def put_ephemeral_event(self, event: EphemeralEvent) -> None:
        if event.type == "m.typing":
            self.typing = list(event.content.get("user_ids", []))
        self.ephemeral[event.type] = event
        await self._listeners.dispatch(
            ListenerKind.EPHEMERAL, self, event, event_type=event.type
        )

    async def process_state_event(self, event: RoomEvent) -> None:
        """Record a state event, last write wins per (type, state_key)."""
        state_key = event.state_key or ""
        self.state[(event.type, state_key)] = event

        level = self.client.cache_level
        if level != CacheLevel.NONE:
            self._apply_known_state(event, state_key, level)

        await self._listeners.dispatch(ListenerKind.STATE, self, event, event_type=event.type)

    def _apply_known_state(self, event: RoomEvent, state_key: str, level: CacheLevel) -> None:
        content = event.content
        etype = event.type
        if etype == "m.room.name":
            self.name = content.get("name")
        elif etype == "m.room.topic":
            self.topic = content.get("topic")
        elif etype == "m.room.canonical_alias":
            self.canonical_alias = content.get("alias")
        elif etype == "m.room.aliases":
            self.aliases = list(content.get("aliases", []))
        elif etype == "m.room.join_rules":
            self.invite_only = content.get("join_rule") == "invite"
        elif etype == "m.room.guest_access":
            self.guest_access = content.get("guest_access") == "can_join"
        elif etype == "m.room.encryption":
            if content.get("algorithm"):
                self.enable_encryption()
        elif etype == "m.room.member" and level == CacheLevel.ALL:
            self._apply_membership(state_key, content)

    def _apply_membership(self, user_id: str, content: dict) -> None:
        membership = content.get("membership")
        if membership == Membership.join:
            user = self.client.users.get(user_id)
            if user is None:
                user = User(user_id)
                self.client.users[user_id] = user
            if content.get("displayname"):
                user.displayname = content["displayname"]
            if content.get("avatar_url"):
                user.avatar_url = content["avatar_url"]
            user.rooms.add(self.room_id)
            self._members[user_id] = user
        elif membership in (Membership.leave, Membership.ban):
            user = self._members.pop(user_id, None)
            if user is not None:
                user.rooms.discard(self.room_id)
                log.debug("%s left %s", user_id, self.room_id)
