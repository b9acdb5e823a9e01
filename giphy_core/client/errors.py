"""Error taxonomy surfaced through operation completions."""

from __future__ import annotations

from typing import Optional


class GiphyError(Exception):
    """Base class for every failure delivered to a completion handler."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class TransportError(GiphyError):
    """Connectivity, DNS, TLS or timeout failure; there is no body to decode."""


class HTTPStatusError(GiphyError):
    """The service answered with an error status (HTTP or ``meta.status``)."""

    def __init__(self, status_code: int, service_message: Optional[str] = None) -> None:
        message = f"Giphy API returned status {status_code}"
        if service_message:
            message = f"{message}: {service_message}"
        super().__init__(message)
        self.status_code = status_code
        self.service_message = service_message


class DecodeError(GiphyError):
    """The body did not match the expected response shape."""

    def __init__(self, message: str, *, shape: Optional[str] = None, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.shape = shape
        self.field = field
