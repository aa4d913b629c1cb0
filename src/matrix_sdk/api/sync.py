"""Sync API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from matrix_sdk.http import CLIENT_PREFIX, decode
from matrix_sdk.models.sync import SyncResponse

if TYPE_CHECKING:
    from matrix_sdk.http import HTTPClient


class SyncAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def sync(
        self,
        since: str | None = None,
        timeout_ms: int = 30000,
        filter: str | None = None,
        *,
        full_state: bool = False,
        set_presence: str | None = None,
    ) -> SyncResponse:
        """Long-poll ``/sync``.

        The HTTP timeout is stretched past ``timeout_ms`` so the homeserver,
        not the client, decides when an idle poll ends.
        """
        params: dict[str, Any] = {"timeout": timeout_ms}
        if since is not None:
            params["since"] = since
        if filter is not None:
            params["filter"] = filter
        if full_state:
            params["full_state"] = "true"
        if set_presence is not None:
            params["set_presence"] = set_presence
        r = await self._http.get(
            f"{CLIENT_PREFIX}/sync",
            params=params,
            timeout=timeout_ms / 1000.0 + self._http.timeout,
        )
        return decode(r, SyncResponse)
