"""IRC subsystem package.

Contains the message model, parser, formatter, transport, outbound sink,
handshake and keep-alive handlers, the client core and channel views.
"""

from .channel import IRCChannel  # noqa: F401
from .client import IRCClient  # noqa: F401
from .connection import AsyncioTransport, Transport  # noqa: F401
from .formatter import format_irc_message  # noqa: F401
from .models import ConnectionState, IRCMessage  # noqa: F401
from .parser import parse_irc_message  # noqa: F401
from .sink import OutboundSink  # noqa: F401

__all__ = [
    "AsyncioTransport",
    "ConnectionState",
    "IRCChannel",
    "IRCClient",
    "IRCMessage",
    "OutboundSink",
    "Transport",
    "format_irc_message",
    "parse_irc_message",
]
