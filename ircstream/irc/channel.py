"""Channel-scoped view over a client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..logs.logger import logger
from ..stream import Stream
from .models import IRCMessage

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCChannel:
    """Messages addressed to one channel plus join/send helpers.

    Channel names compare case-insensitively; the view keeps no state beyond
    the name.
    """

    def __init__(self, client: IRCClient, channel: str) -> None:
        self.client = client
        self.channel = channel
        key = channel.lower()
        self.messages: Stream[IRCMessage] = client.messages.filter(
            lambda message: bool(message.params) and message.params[0].lower() == key
        )

    def command_stream(self, command: str) -> Stream[IRCMessage]:
        return self.messages.filter(lambda message: message.command == command)

    def join(self) -> None:
        logger.log_event("irc", "join", nick=self.client.options.nick, channel=self.channel)
        self.client.send(IRCMessage("JOIN", (self.channel,)))

    def send_message(self, text: str) -> None:
        self.client.send(IRCMessage("PRIVMSG", (self.channel, text)))
