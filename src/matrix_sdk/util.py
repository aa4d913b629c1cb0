"""Identifier validation helpers."""

from __future__ import annotations

from matrix_sdk.errors import MatrixValidationError


def check_room_id(room_id: str) -> None:
    if not room_id.startswith("!"):
        raise MatrixValidationError("RoomIDs start with !")
    if ":" not in room_id:
        raise MatrixValidationError("RoomIDs must have a domain component, separated by a :")


def check_user_id(user_id: str) -> None:
    if not user_id.startswith("@"):
        raise MatrixValidationError("UserIDs start with @")
    if ":" not in user_id:
        raise MatrixValidationError("UserIDs must have a domain component, separated by a :")


def check_mxc_url(mxc_url: str) -> None:
    if not mxc_url.startswith("mxc://"):
        raise MatrixValidationError("MXC URL did not begin with 'mxc://'")
