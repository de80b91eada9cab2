"""Errors raised while talking to the content delivery service."""

from __future__ import annotations


class TxNativeError(RuntimeError):
    pass


class NetworkError(TxNativeError):
    """The CDS could not be reached at all."""


class RemoteError(TxNativeError):
    """The CDS answered with a status other than 200 or 202."""

    def __init__(self, message: str, *, status_code: int, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ShapeError(TxNativeError):
    """A 200 response did not carry the expected ``data`` payload."""


class PollTimeoutError(TxNativeError, TimeoutError):
    pass


__all__ = [
    "TxNativeError",
    "NetworkError",
    "RemoteError",
    "ShapeError",
    "PollTimeoutError",
]
