"""Error types raised or delivered by the client."""

from .internal import (  # noqa: F401
    ClientStateError,
    ConfigError,
    InternalError,
    TransmissionError,
)

__all__ = ["InternalError", "TransmissionError", "ConfigError", "ClientStateError"]
