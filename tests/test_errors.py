"""Unit tests for error classes."""

from __future__ import annotations

import httpx

from matrix_sdk.errors import (
    MatrixError,
    MatrixNetworkError,
    MatrixRequestError,
    MatrixUnexpectedResponse,
    MatrixValidationError,
)
from matrix_sdk.models.errors import ErrorCode


class TestMatrixRequestError:
    def test_from_response(self):
        response = httpx.Response(
            403,
            json={"errcode": "M_FORBIDDEN", "error": "You are not invited to this room."},
        )
        err = MatrixRequestError.from_response(response)
        assert err.status == 403
        assert err.errcode == "M_FORBIDDEN"
        assert err.code == ErrorCode.FORBIDDEN
        assert err.error.error == "You are not invited to this room."
        assert err.response is response
        assert "M_FORBIDDEN" in err.content
        assert not err.is_server_error

    def test_from_response_no_body(self):
        """Handle non-JSON error body gracefully."""
        response = httpx.Response(502, text="Bad Gateway")
        err = MatrixRequestError.from_response(response)
        assert err.status == 502
        assert err.error is None
        assert err.errcode is None
        assert err.content == "Bad Gateway"
        assert err.is_server_error
        assert "Bad Gateway" in str(err)

    def test_unknown_errcode(self):
        response = httpx.Response(400, json={"errcode": "ORG_EXAMPLE_CUSTOM", "error": "x"})
        err = MatrixRequestError.from_response(response)
        assert err.errcode == "ORG_EXAMPLE_CUSTOM"
        assert err.code is None

    def test_retry_after(self):
        response = httpx.Response(
            429,
            json={"errcode": "M_LIMIT_EXCEEDED", "error": "Too many requests", "retry_after_ms": 2000},
        )
        err = MatrixRequestError.from_response(response)
        assert err.code == ErrorCode.LIMIT_EXCEEDED
        assert err.retry_after_ms == 2000

    def test_str(self):
        err = MatrixRequestError.from_response(
            httpx.Response(404, json={"errcode": "M_NOT_FOUND", "error": "Room not found"})
        )
        s = str(err)
        assert "404" in s
        assert "M_NOT_FOUND" in s
        assert "Room not found" in s

    def test_no_error_properties(self):
        err = MatrixRequestError(status=500)
        assert err.code is None
        assert err.retry_after_ms is None
        assert str(err) == "[500] UNKNOWN: HTTP 500"


class TestMatrixNetworkError:
    def test_message_with_request(self):
        err = MatrixNetworkError("Connection refused", "GET", "/_matrix/client/v3/sync")
        assert "GET" in str(err)
        assert "/_matrix/client/v3/sync" in str(err)
        assert "Connection refused" in str(err)

    def test_basic(self):
        err = MatrixNetworkError("Connection refused")
        assert str(err) == "Connection refused"


def test_hierarchy():
    for cls in (MatrixRequestError, MatrixNetworkError, MatrixValidationError, MatrixUnexpectedResponse):
        assert issubclass(cls, MatrixError)
