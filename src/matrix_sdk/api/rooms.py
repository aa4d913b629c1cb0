"""Room API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from matrix_sdk.http import CLIENT_PREFIX, decode, decode_json
from matrix_sdk.models.rooms import RoomIdResponse

if TYPE_CHECKING:
    from matrix_sdk.http import HTTPClient


def _q(value: str) -> str:
    return quote(value, safe="")


class RoomsAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def create_room(
        self,
        alias: str | None = None,
        name: str | None = None,
        is_public: bool = False,
        invitees: list[str] | None = None,
        additional: dict[str, Any] | None = None,
    ) -> RoomIdResponse:
        payload: dict[str, Any] = {"visibility": "public" if is_public else "private"}
        if alias is not None:
            payload["room_alias_name"] = alias
        if name is not None:
            payload["name"] = name
        if invitees:
            payload["invite"] = list(invitees)
        if additional:
            payload.update(additional)
        r = await self._http.post(f"{CLIENT_PREFIX}/createRoom", json=payload)
        return decode(r, RoomIdResponse)

    async def join_room(self, room_id_or_alias: str) -> RoomIdResponse:
        r = await self._http.post(f"{CLIENT_PREFIX}/join/{_q(room_id_or_alias)}", json={})
        data = decode_json(r)
        data.setdefault("room_id", room_id_or_alias)
        return RoomIdResponse.model_validate(data)

    async def leave_room(self, room_id: str) -> None:
        await self._http.post(f"{CLIENT_PREFIX}/rooms/{_q(room_id)}/leave", json={})

    async def get_state_event(
        self, room_id: str, event_type: str, state_key: str = ""
    ) -> dict[str, Any]:
        path = f"{CLIENT_PREFIX}/rooms/{_q(room_id)}/state/{_q(event_type)}"
        if state_key:
            path += f"/{_q(state_key)}"
        r = await self._http.get(path)
        return decode_json(r)

    async def invite_user(self, room_id: str, user_id: str) -> None:
        await self._http.post(
            f"{CLIENT_PREFIX}/rooms/{_q(room_id)}/invite", json={"user_id": user_id}
        )

    async def remove_room_alias(self, alias: str) -> None:
        await self._http.delete(f"{CLIENT_PREFIX}/directory/room/{_q(alias)}")
