"""Typed failures raised by the remote API client."""

from typing import Optional


class RemoteError(Exception):
    """Base class for every failure surfaced by RemoteClient."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(RemoteError):
    """The request never reached the server or the connection broke."""


class HttpError(RemoteError):
    """The server answered with a non-2xx status."""

    def __init__(self, status: int, detail: Optional[str] = None):
        message = f"HTTP {status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status = status
        self.detail = detail


class DecodeError(RemoteError):
    """The response body could not be decoded into the expected model."""
