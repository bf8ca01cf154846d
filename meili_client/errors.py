"""Errors raised by the search client.

Socket-level failures are not wrapped: they surface as the httpx exception
(``httpx.TransportError`` and its subclasses) raised by the transport.
"""

from typing import Any


class MeiliError(RuntimeError):
    """Base class of all errors raised by this library."""


class MeiliApiError(MeiliError):
    """Raised when the service answers with a non-2xx status.

    Attributes:
        status_code (int): HTTP status of the response.
        body (Any): Decoded JSON body, or the raw text when it is not JSON.
        method (str): HTTP method of the failed request.
        url (str): Full URL of the failed request.
    """

    def __init__(self, status_code: int, body: Any, method: str = "", url: str = ""):
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} failed with status {status_code}: {self.message or body}")

    @property
    def message(self) -> str | None:
        if isinstance(self.body, dict):
            return self.body.get("message")
        return None

    @property
    def error_code(self) -> str | None:
        if isinstance(self.body, dict):
            return self.body.get("errorCode")
        return None


class MeiliCancelledError(MeiliError):
    """Raised by a search that was aborted through its scope's cancellation token."""

    def __init__(self, reason: str | None = None):
        self.reason = reason
        super().__init__(f"Search cancelled: {reason}" if reason else "Search cancelled")
