"""SDK exception hierarchy."""

from __future__ import annotations

import httpx

from matrix_sdk.models.errors import ErrorCode, ErrorResponse


class MatrixError(Exception):
    """Base for every error raised by the SDK."""


class MatrixRequestError(MatrixError):
    """Raised when the homeserver answers with a non-2xx response."""

    def __init__(
        self,
        status: int,
        content: str = "",
        error: ErrorResponse | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        self.status = status
        self.content = content
        self.error = error
        self.response = response
        code = error.errcode if error else "UNKNOWN"
        msg = error.error if error and error.error else (content or f"HTTP {status}")
        super().__init__(f"[{status}] {code}: {msg}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> MatrixRequestError:
        """Build from an httpx response, attempting to parse the error body."""
        error: ErrorResponse | None = None
        try:
            body = response.json()
            if isinstance(body, dict) and "errcode" in body:
                error = ErrorResponse.model_validate(body)
        except Exception:
            pass
        return cls(
            status=response.status_code,
            content=response.text,
            error=error,
            response=response,
        )

    @property
    def errcode(self) -> str | None:
        return self.error.errcode if self.error else None

    @property
    def code(self) -> ErrorCode | None:
        return self.error.code if self.error else None

    @property
    def retry_after_ms(self) -> int | None:
        if self.error:
            return self.error.retry_after_ms
        return None

    @property
    def is_server_error(self) -> bool:
        return self.status >= 500


class MatrixNetworkError(MatrixError):
    """Raised when the request could not be completed (connection refused, timeout, etc.)."""

    def __init__(self, message: str, method: str | None = None, path: str | None = None) -> None:
        self.method = method
        self.path = path
        if method and path:
            message = f"Something went wrong in {method} requesting {path}: {message}"
        super().__init__(message)


class MatrixValidationError(MatrixError):
    """Raised for malformed identifiers or client configuration."""


class MatrixUnexpectedResponse(MatrixError):
    """Raised when a successful response is missing a field the SDK relies on."""
