"""Event models delivered through sync.

Only the envelope is interpreted; ``content`` and any unknown top-level keys
are carried through untouched.
"""

from __future__ import annotations

from typing import Any

from matrix_sdk.models.base import MatrixModel


class Event(MatrixModel):
    """Base for all events."""
    type: str
    content: dict[str, Any] = {}
    sender: str | None = None


class RoomEvent(Event):
    """A timeline or state event.

    The wire payload does not carry ``room_id`` inside ``/sync``; the sync loop
    stamps it on before the event reaches rooms or listeners.
    """
    event_id: str | None = None
    origin_server_ts: int | None = None
    state_key: str | None = None
    unsigned: dict[str, Any] = {}
    room_id: str | None = None

    @property
    def is_state(self) -> bool:
        return self.state_key is not None


class StrippedStateEvent(Event):
    state_key: str = ""


class PresenceEvent(Event):
    @property
    def presence(self) -> str | None:
        return self.content.get("presence")


class EphemeralEvent(Event):
    """Typing notifications, receipts and other non-persisted room signals."""
    room_id: str | None = None
