"""SDK response models."""

from matrix_sdk.models.base import MatrixModel
from matrix_sdk.models.errors import ErrorCode, ErrorResponse

from matrix_sdk.models.auth import LoginResponse, RegisterResponse, WhoamiResponse
from matrix_sdk.models.enums import CacheLevel, Membership
from matrix_sdk.models.events import (
    EphemeralEvent,
    Event,
    PresenceEvent,
    RoomEvent,
    StrippedStateEvent,
)
from matrix_sdk.models.rooms import RoomIdResponse, UploadResponse
from matrix_sdk.models.sync import (
    AccountDataSection,
    EphemeralSection,
    InviteState,
    InvitedRoom,
    JoinedRoom,
    LeftRoom,
    PresenceSection,
    Rooms,
    StateSection,
    SyncResponse,
    Timeline,
)

__all__ = [
    "AccountDataSection",
    "CacheLevel",
    "EphemeralEvent",
    "EphemeralSection",
    "ErrorCode",
    "ErrorResponse",
    "Event",
    "InviteState",
    "InvitedRoom",
    "JoinedRoom",
    "LeftRoom",
    "LoginResponse",
    "MatrixModel",
    "Membership",
    "PresenceEvent",
    "PresenceSection",
    "RegisterResponse",
    "RoomEvent",
    "RoomIdResponse",
    "Rooms",
    "StateSection",
    "StrippedStateEvent",
    "SyncResponse",
    "Timeline",
    "UploadResponse",
    "WhoamiResponse",
]
