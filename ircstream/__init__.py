"""Reactive-stream IRC client."""

from .config import ClientOptions, load_options  # noqa: F401
from .errors import ClientStateError, ConfigError, InternalError, TransmissionError  # noqa: F401
from .irc import (  # noqa: F401
    AsyncioTransport,
    ConnectionState,
    IRCChannel,
    IRCClient,
    IRCMessage,
    format_irc_message,
    parse_irc_message,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncioTransport",
    "ClientOptions",
    "ClientStateError",
    "ConfigError",
    "ConnectionState",
    "IRCChannel",
    "IRCClient",
    "IRCMessage",
    "InternalError",
    "TransmissionError",
    "format_irc_message",
    "load_options",
    "parse_irc_message",
]
