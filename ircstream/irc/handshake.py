"""Registration handshake sent once the connection is up."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..logs.logger import logger
from ..stream import Subscription
from .models import IRCMessage

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCHandshake:
    def __init__(self, client: IRCClient) -> None:
        self.client = client
        self.sent = False
        self._subscription: Subscription | None = None

    def attach(self) -> None:
        self._subscription = self.client.connected.subscribe(self._on_connected)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_connected(self, connected: bool) -> None:
        # One registration per connection; repeated True signals are ignored.
        if not connected or self.sent:
            return
        self.sent = True
        self.send_user_and_nick()

    def send_user_and_nick(self) -> None:
        options = self.client.options
        logger.log_event("irc", "register", nick=options.nick, username=options.username)
        self.client.send(
            IRCMessage("USER", (options.username, ".", ".", options.real_name))
        )
        self.client.send(IRCMessage("NICK", (options.nick,)))
