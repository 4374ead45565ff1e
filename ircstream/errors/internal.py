"""Centralized internal error hierarchy.

These exceptions give the client's failure modes semantic categories. Raw
``OSError`` / ``asyncio.TimeoutError`` / pydantic errors never cross the
transport or configuration boundary; they are wrapped into one of these.

Classes:
  InternalError        – Base for all internal errors.
  TransmissionError    – The transport closed with an error condition.
  ConfigError          – Client options are missing or invalid.
  ClientStateError     – A lifecycle operation was called in the wrong state.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class TransmissionError(InternalError):
    """Raised when the connection fails or closes with an error.

    Delivered as the terminal event of the inbound data and message streams.
    The originating exception, if any, is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Transmission error",
        *,
        data: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message, data=data)


class ConfigError(InternalError):
    """Raised when client options cannot be loaded or fail validation."""


class ClientStateError(InternalError):
    """Raised when a lifecycle operation is not valid in the current state."""


__all__ = [
    "InternalError",
    "TransmissionError",
    "ConfigError",
    "ClientStateError",
]
