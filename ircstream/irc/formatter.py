"""Outbound wire formatting."""

from __future__ import annotations

from ..constants import LINE_TERMINATOR
from .models import IRCMessage

_LINE_BREAKS = str.maketrans("", "", "\r\n")


def _strip_line_breaks(text: str) -> str:
    return text.translate(_LINE_BREAKS)


def format_irc_message(message: IRCMessage) -> str:
    """Render ``message`` as one wire line including the terminator.

    The last parameter is always sent in trailing form (``:`` prefixed) so it
    may contain spaces. A message without params is sent as the bare command.
    CR and LF are removed from every part so one message is always one line.
    Prefixes are never written; servers ignore them from clients.
    """
    command = _strip_line_breaks(message.command)
    if not message.params:
        return f"{command}{LINE_TERMINATOR}"
    *middle, last = (_strip_line_breaks(p) for p in message.params)
    parts = [command, *middle, f":{last}"]
    return " ".join(parts) + LINE_TERMINATOR


def quit_line(reason: str) -> str:
    return format_irc_message(IRCMessage("QUIT", (reason,)))
