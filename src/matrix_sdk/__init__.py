"""Matrix Client SDK: async Python client and sync engine for Matrix homeservers."""

from matrix_sdk.client import Client
from matrix_sdk.errors import (
    MatrixError,
    MatrixNetworkError,
    MatrixRequestError,
    MatrixUnexpectedResponse,
    MatrixValidationError,
)
from matrix_sdk.listeners import ListenerKind, ListenerRegistry
from matrix_sdk.models.enums import CacheLevel
from matrix_sdk.room import Room
from matrix_sdk.sync import SyncLoop
from matrix_sdk.user import User

__all__ = [
    "CacheLevel",
    "Client",
    "ListenerKind",
    "ListenerRegistry",
    "MatrixError",
    "MatrixNetworkError",
    "MatrixRequestError",
    "MatrixUnexpectedResponse",
    "MatrixValidationError",
    "Room",
    "SyncLoop",
    "User",
]
