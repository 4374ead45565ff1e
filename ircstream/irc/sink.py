"""Outbound message sink."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import QUIT_ERROR_REASON, QUIT_LEAVING_REASON, WIRE_ENCODING
from ..errors import TransmissionError
from ..logs.logger import logger
from .formatter import format_irc_message, quit_line
from .models import IRCMessage

if TYPE_CHECKING:  # pragma: no cover
    from .connection import Transport


class OutboundSink:
    """Observer that formats messages and writes them to the transport.

    Completion sends ``QUIT :Leaving`` and an error sends ``QUIT :Error``;
    either closes the sink, after which further messages are dropped. Writes
    to a transport that is already gone are logged, not raised.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        encoding: str = WIRE_ENCODING,
        nick: str | None = None,
    ) -> None:
        self.transport = transport
        self.encoding = encoding
        self.nick = nick
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def on_next(self, message: IRCMessage) -> None:
        if self._closed:
            logger.log_event(
                "irc",
                "send_after_close",
                level=logging.WARNING,
                nick=self.nick,
                command=message.command,
            )
            return
        self._write(format_irc_message(message), message.command)

    def on_complete(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._write(quit_line(QUIT_LEAVING_REASON), "QUIT")

    def on_error(self, error: BaseException) -> None:
        if self._closed:
            return
        self._closed = True
        logger.log_event(
            "irc",
            "quit_on_error",
            level=logging.WARNING,
            nick=self.nick,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._write(quit_line(QUIT_ERROR_REASON), "QUIT")

    def _write(self, line: str, command: str) -> None:
        try:
            self.transport.write(line.encode(self.encoding))
        except TransmissionError as e:
            logger.log_event(
                "irc",
                "write_failed",
                level=logging.WARNING,
                nick=self.nick,
                command=command,
                error=str(e),
            )
            return
        logger.log_event(
            "irc", "sent", level=logging.DEBUG, nick=self.nick, raw=line.rstrip("\r\n")
        )
