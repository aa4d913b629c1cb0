"""HTTP client wrapping httpx with auth headers and rate-limit retry."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from matrix_sdk.errors import MatrixNetworkError, MatrixRequestError, MatrixUnexpectedResponse

log = logging.getLogger(__name__)

CLIENT_PREFIX = "/_matrix/client/v3"
MEDIA_PREFIX = "/_matrix/media/v3"

T = TypeVar("T", bound=BaseModel)

_MAX_RETRIES = 3
_BASE_RETRY_DELAY = 1.0


def _retry_delay(response: httpx.Response) -> float:
    """Seconds to wait after a 429: body ``retry_after_ms``, then ``Retry-After``, then 1s."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        ms = body.get("retry_after_ms")
        if isinstance(ms, (int, float)) and ms > 0:
            return ms / 1000.0

    ra_header = response.headers.get("retry-after")
    if ra_header:
        try:
            return max(float(ra_header), 0.0)
        except ValueError:
            # HTTP-date form is not supported
            pass
    return _BASE_RETRY_DELAY


def decode(response: httpx.Response, model: type[T]) -> T:
    """Validate a 2xx body into ``model``.

    A body that is not JSON or lacks required fields raises
    :class:`MatrixUnexpectedResponse`.
    """
    try:
        return model.model_validate(response.json())
    except (ValidationError, ValueError) as exc:
        raise MatrixUnexpectedResponse(
            f"Unexpected {model.__name__} body from {response.request.url.path}: {exc}"
        ) from exc


def decode_json(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise MatrixUnexpectedResponse(
            f"Response from {response.request.url.path} is not JSON"
        ) from exc
    if not isinstance(body, dict):
        raise MatrixUnexpectedResponse(
            f"Response from {response.request.url.path} is not a JSON object"
        )
    return body


class HTTPClient:
    """Async HTTP client for the Matrix client-server API.

    Server errors (5xx) are raised immediately; retrying them is the
    caller's decision (the sync loop backs off on its own).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
        )

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        self._token = value

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {}
        if self._token:
            h["Authorization"] = f"Bearer {self._token}"
        return h

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Make an API request, retrying when the homeserver rate-limits us."""
        merged_headers = self._headers()
        if headers:
            merged_headers.update(headers)

        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout

        for attempt in range(_MAX_RETRIES):
            try:
                response = await self._client.request(
                    method,
                    path,
                    json=json,
                    params=params,
                    content=content,
                    headers=merged_headers,
                    **extra,
                )
            except httpx.TransportError as exc:
                raise MatrixNetworkError(str(exc), method, path) from exc

            if response.status_code == 429:
                retry_after = _retry_delay(response)
                if attempt < _MAX_RETRIES - 1:
                    log.debug("Rate limited on %s, retrying in %.2fs", path, retry_after)
                    await asyncio.sleep(retry_after)
                    continue
                raise MatrixRequestError.from_response(response)

            if response.status_code >= 400:
                raise MatrixRequestError.from_response(response)

            return response

        # Should not reach here, but just in case
        raise MatrixRequestError.from_response(response)  # type: ignore[possibly-undefined]

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def close(self) -> None:
        await self._client.aclose()
