"""Reactive IRC client core."""

from __future__ import annotations

import logging

from ..config.model import ClientOptions
from ..constants import WIRE_ENCODING
from ..errors import ClientStateError
from ..logs.logger import logger
from ..stream import Broadcast, Stream, Subscription, split_lines
from .connection import AsyncioTransport, Transport
from .handshake import IRCHandshake
from .keepalive import IRCKeepAlive
from .models import ConnectionState, IRCMessage
from .parser import parse_irc_message
from .sink import OutboundSink


class IRCClient:  # pylint: disable=too-many-instance-attributes
    """Binds a transport, the line/message pipeline and outbound formatting.

    Inbound bytes are split into lines, parsed, and broadcast on
    :attr:`messages` in arrival order. Outbound messages go through
    :attr:`sink`. The handshake fires on the first ``connected`` signal and
    the keep-alive answers every ``PING``. When the inbound stream ends the
    sink sends ``QUIT`` and the client is terminated; there is no reconnect.
    """

    def __init__(
        self,
        options: ClientOptions,
        transport: Transport | None = None,
        *,
        encoding: str = WIRE_ENCODING,
    ) -> None:
        self.options = options
        self.transport: Transport = transport or AsyncioTransport()
        self.encoding = encoding
        self.state = ConnectionState.IDLE
        self.messages: Broadcast[IRCMessage] = Broadcast(name="irc.messages")
        self.sink = OutboundSink(self.transport, encoding=encoding, nick=options.nick)
        self._subscriptions: list[Subscription] = [
            self.connected.subscribe(self._on_connected),
            split_lines(self.transport.data, encoding).subscribe(
                self._on_line, self._on_inbound_complete, self._on_inbound_error
            ),
        ]
        self.handshake = IRCHandshake(self)
        self.keepalive = IRCKeepAlive(self)
        self.handshake.attach()
        self.keepalive.attach()

    @property
    def connected(self) -> Stream[bool]:
        return self.transport.connected

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                nick=self.options.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def connect(self) -> None:
        """Ask the transport to open ``hostname:port``.

        Raises:
            ClientStateError: If the client already left the idle state.
        """
        if self.state != ConnectionState.IDLE:
            raise ClientStateError(
                "connect() called twice", data={"state": self.state.name}
            )
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc",
            "connect_start",
            nick=self.options.nick,
            hostname=self.options.hostname,
            port=self.options.port,
        )
        self.transport.connect(self.options.hostname, self.options.port)

    def send(self, message: IRCMessage) -> None:
        self.sink.on_next(message)

    def command_stream(self, command: str) -> Stream[IRCMessage]:
        """Inbound messages whose command equals ``command`` exactly."""
        return self.messages.filter(lambda message: message.command == command)

    def quit(self) -> None:
        """Send ``QUIT :Leaving`` and close the connection gracefully."""
        self.sink.on_complete()
        self.transport.end()

    def close(self) -> None:
        """Detach the client's own handlers from the transport streams."""
        self.handshake.detach()
        self.keepalive.detach()
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()

    def _on_connected(self, connected: bool) -> None:
        if connected and self.state in (ConnectionState.IDLE, ConnectionState.CONNECTING):
            self._set_state(ConnectionState.CONNECTED)

    def _on_line(self, line: str) -> None:
        logger.log_event(
            "irc", "received", level=logging.DEBUG, nick=self.options.nick, raw=line
        )
        message = parse_irc_message(line)
        if not message.command:
            logger.log_event(
                "irc", "line_dropped", level=logging.DEBUG, nick=self.options.nick, raw=line
            )
            return
        self.messages.next(message)

    def _on_inbound_complete(self) -> None:
        logger.log_event("irc", "stream_complete", nick=self.options.nick)
        self._set_state(ConnectionState.TERMINATED)
        self.messages.complete()
        self.sink.on_complete()

    def _on_inbound_error(self, error: BaseException) -> None:
        logger.log_event(
            "irc",
            "stream_error",
            level=logging.ERROR,
            nick=self.options.nick,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._set_state(ConnectionState.TERMINATED)
        self.messages.error(error)
        self.sink.on_error(error)
