"""PING/PONG responder."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ..logs.logger import logger
from ..stream import Subscription
from .models import IRCMessage

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCKeepAlive:
    """Answers every inbound ``PING`` with a ``PONG`` carrying the same params."""

    def __init__(self, client: IRCClient) -> None:
        self.client = client
        self.last_ping_from_server = 0.0
        self.pings_answered = 0
        self._subscription: Subscription | None = None

    def attach(self) -> None:
        self._subscription = self.client.command_stream("PING").subscribe(self._on_ping)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_ping(self, message: IRCMessage) -> None:
        self.client.send(IRCMessage("PONG", message.params))
        self.last_ping_from_server = time.time()
        self.pings_answered += 1
        logger.log_event(
            "irc",
            "pong",
            level=logging.DEBUG,
            nick=self.client.options.nick,
            params=" ".join(message.params),
        )
