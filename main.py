#!/usr/bin/env python3
"""
Demo entry point: connects, joins a channel after registration and answers
``@date`` with the current UTC time.
"""

import asyncio
import logging
import os
import sys
from datetime import UTC, datetime

from ircstream import (
    ConfigError,
    IRCChannel,
    IRCClient,
    IRCMessage,
    TransmissionError,
    load_options,
)
from ircstream.logging_config import configure_logging
from ircstream.logs.logger import logger


def install_date_responder(client: IRCClient, channel_name: str) -> None:
    def on_welcome(_message: IRCMessage) -> None:
        logger.log_event("app", "welcome", hostname=client.options.hostname)
        channel = IRCChannel(client, channel_name)
        channel.join()

        def on_privmsg(message: IRCMessage) -> None:
            if len(message.params) > 1 and message.params[1] == "@date":
                logger.log_event("app", "date_request", author=message.nick or "?")
                channel.send_message(f"Current date is: {datetime.now(UTC).isoformat()}")

        channel.command_stream("PRIVMSG").subscribe(on_privmsg)

    client.command_stream("001").subscribe(on_welcome)


async def main():
    """Main function"""
    logger.log_event("app", "start")
    try:
        options = load_options()
    except ConfigError as e:
        logger.log_event("app", "config_error", level=logging.ERROR, error=str(e))
        sys.exit(1)

    client = IRCClient(options)
    install_date_responder(client, os.environ.get("IRC_CHANNEL", "#ircstream"))
    client.connect()
    try:
        async with client.messages.iterate() as messages:
            async for _message in messages:
                pass
    except TransmissionError as e:
        logger.log_event("app", "connection_lost", level=logging.ERROR, error=str(e))
        sys.exit(1)
    except asyncio.CancelledError:
        client.quit()
        raise
    finally:
        logger.log_event("app", "shutdown")


if __name__ == "__main__":
    configure_logging()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
