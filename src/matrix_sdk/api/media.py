"""Media API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matrix_sdk.http import MEDIA_PREFIX, decode
from matrix_sdk.models.rooms import UploadResponse

if TYPE_CHECKING:
    from matrix_sdk.http import HTTPClient


class MediaAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def upload(
        self, content: bytes, content_type: str, filename: str | None = None
    ) -> UploadResponse:
        params = {"filename": filename} if filename else None
        r = await self._http.post(
            f"{MEDIA_PREFIX}/upload",
            content=content,
            params=params,
            headers={"Content-Type": content_type},
        )
        return decode(r, UploadResponse)
