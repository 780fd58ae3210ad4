"""Exceptions raised by the group membership client."""

from __future__ import annotations

from typing import Any


class KcAdminError(Exception):
    """Base exception for admin API failures."""


class HTTPStatusError(KcAdminError):
    """The server answered with an unexpected status code.

    Attributes:
        status_code: HTTP status code of the response
        body: parsed response body (JSON value, raw bytes or ``None``)
        operation: client operation that failed, e.g. ``"find"``
    """

    def __init__(self, status_code: int, body: Any, operation: str | None = None):
        self.status_code = status_code
        self.body = body
        self.operation = operation
        super().__init__(status_code, body)

    def __reduce__(self):
        return self.__class__, (self.status_code, self.body, self.operation)

    def __str__(self) -> str:
        where = f"{self.operation}: " if self.operation else ""
        return f"{where}[HTTP {self.status_code}] {error_message(self.body)}"


class RawBodyError(HTTPStatusError):
    """Unexpected status from ``add``/``remove``.

    ``args[0]`` and :attr:`body` hold the response body exactly as received.
    """

    def __init__(self, body: Any, status_code: int, operation: str | None = None):
        super().__init__(status_code, body, operation)
        self.args = (body,)

    def __reduce__(self):
        return self.__class__, (self.body, self.status_code, self.operation)


def error_message(body: Any) -> str:
    """Best-effort human readable message from an error body."""
    if isinstance(body, dict):
        for key in ("errorMessage", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    if isinstance(body, (bytes, bytearray)):
        return body.decode("utf-8", errors="ignore")
    if body is None:
        return ""
    return str(body)
