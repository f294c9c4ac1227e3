"""SDK exception hierarchy."""

from __future__ import annotations

import httpx

from sdn_sdk.models.errors import ErrorResponse


class SDNError(Exception):
    """Base class for all SDK errors."""


class SDNHTTPError(SDNError):
    """Raised when the node returns a non-2xx response.

    ``error`` holds the decoded ``{"errcode": ..., "error": ...}`` body when the
    server sent one; ``contents`` always holds the raw body so that proxy
    errors (HTML pages and the like) are not lost.
    """

    def __init__(
        self,
        status: int,
        error: ErrorResponse | None = None,
        response: httpx.Response | None = None,
        contents: bytes = b"",
    ) -> None:
        self.status = status
        self.error = error
        self.response = response
        self.contents = contents
        if error is not None:
            msg = f"[{status}] {error.errcode}: {error.error}"
        else:
            body = contents.decode("utf-8", errors="replace")
            msg = f"[{status}] HTTP {status}" + (f": {body}" if body else "")
        super().__init__(msg)

    @classmethod
    def from_response(cls, response: httpx.Response) -> SDNHTTPError:
        """Build from an httpx response, attempting to parse the error body."""
        error: ErrorResponse | None = None
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("errcode"):
                error = ErrorResponse.model_validate(body)
        except Exception:
            pass
        return cls(
            status=response.status_code,
            error=error,
            response=response,
            contents=response.content,
        )

    @property
    def code(self) -> str | None:
        return self.error.errcode if self.error else None

    @property
    def message(self) -> str | None:
        return self.error.error if self.error else None

    @property
    def retry_after_ms(self) -> int | None:
        if self.error:
            return self.error.retry_after_ms
        return None


class SDNNetworkError(SDNError):
    """Raised when a transport-level error occurs (connection refused, timeout, bad JSON)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SDNSyncError(SDNError):
    """Raised when the sync loop cannot continue (filter creation failed, token rejected)."""
