"""Remote API access."""

from .client import RemoteClient
from .errors import RemoteError, NetworkError, HttpError, DecodeError

__all__ = [
    "RemoteClient",
    "RemoteError",
    "NetworkError",
    "HttpError",
    "DecodeError",
]
