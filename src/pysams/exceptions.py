"""Custom exception hierarchy for pysams."""

from __future__ import annotations


class SamsError(Exception):
    """Base exception for all pysams errors."""


class SamsConfigError(SamsError):
    """Invalid or missing configuration."""


class SamsSessionError(SamsError):
    """Client used outside its active lifecycle (before enter or after dispose)."""


class SamsTransportError(SamsError):
    """HTTP-level failure (network, timeout, non-JSON body, malformed envelope)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class SamsApiError(SamsError):
    """Server answered with a ``success=false`` envelope.

    The server owns the human-readable ``message``; it is kept verbatim
    so it can be shown to the operator.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
    ) -> None:
        self.endpoint = endpoint
        super().__init__(message)
