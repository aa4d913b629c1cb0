from pydantic import Field

from matrix_sdk.models.base import MatrixModel
from matrix_sdk.models.events import (
    EphemeralEvent,
    Event,
    PresenceEvent,
    RoomEvent,
    StrippedStateEvent,
)


class StateSection(MatrixModel):
    events: list[RoomEvent] = []


class Timeline(MatrixModel):
    events: list[RoomEvent] = []
    prev_batch: str | None = None
    limited: bool = False


class EphemeralSection(MatrixModel):
    events: list[EphemeralEvent] = []


class AccountDataSection(MatrixModel):
    events: list[Event] = []


class PresenceSection(MatrixModel):
    events: list[PresenceEvent] = []


class InviteState(MatrixModel):
    events: list[StrippedStateEvent] = []


class InvitedRoom(MatrixModel):
    invite_state: InviteState = Field(default_factory=InviteState)


class LeftRoom(MatrixModel):
    state: StateSection = Field(default_factory=StateSection)
    timeline: Timeline = Field(default_factory=Timeline)
    account_data: AccountDataSection = Field(default_factory=AccountDataSection)


class JoinedRoom(MatrixModel):
    state: StateSection = Field(default_factory=StateSection)
    timeline: Timeline = Field(default_factory=Timeline)
    ephemeral: EphemeralSection = Field(default_factory=EphemeralSection)
    account_data: AccountDataSection = Field(default_factory=AccountDataSection)
    unread_notifications: dict[str, int] = {}


class Rooms(MatrixModel):
    join: dict[str, JoinedRoom] = {}
    invite: dict[str, InvitedRoom] = {}
    leave: dict[str, LeftRoom] = {}


class SyncResponse(MatrixModel):
    """Decoded ``/sync`` body.

    Absent sections decode to empty ones; the sync loop treats both the same.
    ``state`` is the room-independent state section some homeservers emit
    alongside ``rooms``.
    """

    next_batch: str
    rooms: Rooms = Field(default_factory=Rooms)
    presence: PresenceSection = Field(default_factory=PresenceSection)
    state: StateSection = Field(default_factory=StateSection)
    account_data: AccountDataSection = Field(default_factory=AccountDataSection)
    device_one_time_keys_count: dict[str, int] | None = None
