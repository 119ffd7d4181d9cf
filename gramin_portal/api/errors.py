"""Normalized errors raised by the HTTP client."""

from typing import Any, Optional

import httpx


class ApiError(Exception):
    """A failed call to the backend.

    ``status_code`` is the HTTP status, or 0 when the request never got a
    response (DNS failure, refused connection, timeout).
    """

    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, message={self.message!r})"

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code in (401, 403)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        """Build an error from a non-2xx response."""
        payload = None
        message = None
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            for key in ("message", "error", "detail"):
                value = payload.get(key)
                if isinstance(value, str) and value.strip():
                    message = value
                    break

        if not message:
            text = response.text.strip() if response.text else ""
            message = text[:200] if text else f"HTTP {response.status_code}"

        return cls(response.status_code, message, payload)


def error_message(exc: Optional[BaseException], fallback: str = "Something went wrong") -> str:
    """Best-effort user-facing message for an exception."""
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    if exc is not None and str(exc):
        return str(exc)
    return fallback
