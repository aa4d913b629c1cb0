"""Auth API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from matrix_sdk.http import CLIENT_PREFIX, decode
from matrix_sdk.models.auth import LoginResponse, RegisterResponse, WhoamiResponse

if TYPE_CHECKING:
    from matrix_sdk.http import HTTPClient


class AuthAPI:
    """Methods for login, registration and session endpoints."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def login(self, login_type: str, **fields: Any) -> LoginResponse:
        payload: dict[str, Any] = {"type": login_type}
        payload.update({k: v for k, v in fields.items() if v is not None})
        r = await self._http.post(f"{CLIENT_PREFIX}/login", json=payload)
        return decode(r, LoginResponse)

    async def register(
        self,
        auth: dict[str, Any] | None = None,
        kind: str = "user",
        *,
        username: str | None = None,
        password: str | None = None,
        device_id: str | None = None,
        inhibit_login: bool = False,
    ) -> RegisterResponse:
        payload: dict[str, Any] = {"inhibit_login": inhibit_login}
        if auth:
            payload["auth"] = auth
        if username is not None:
            payload["username"] = username
        if password is not None:
            payload["password"] = password
        if device_id is not None:
            payload["device_id"] = device_id
        r = await self._http.post(
            f"{CLIENT_PREFIX}/register", json=payload, params={"kind": kind}
        )
        return decode(r, RegisterResponse)

    async def whoami(self) -> WhoamiResponse:
        r = await self._http.get(f"{CLIENT_PREFIX}/account/whoami")
        return decode(r, WhoamiResponse)

    async def logout(self) -> None:
        await self._http.post(f"{CLIENT_PREFIX}/logout", json={})
