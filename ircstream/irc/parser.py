"""IRC message parsing.

The parser is deliberately permissive: it never raises and always returns an
:class:`IRCMessage`, degrading to an empty command or missing params when the
line is malformed. Scanning uses an explicit cursor (an index into the line)
threaded through small pure helpers.
"""

from __future__ import annotations

from .models import IRCMessage


def _scan_until_space(line: str, pos: int) -> tuple[str, int]:
    end = line.find(" ", pos)
    if end == -1:
        end = len(line)
    return line[pos:end], end


def _skip_spaces(line: str, pos: int) -> tuple[bool, int]:
    """Advance past a run of spaces; report whether any were consumed."""
    start = pos
    while pos < len(line) and line[pos] == " ":
        pos += 1
    return pos > start, pos


def _scan_params(line: str, pos: int) -> list[str]:
    params: list[str] = []
    while True:
        if line.startswith(":", pos):
            params.append(line[pos + 1 :])
            return params
        param, pos = _scan_until_space(line, pos)
        params.append(param)
        _, pos = _skip_spaces(line, pos)
        if pos >= len(line):
            return params


def parse_irc_message(line: str) -> IRCMessage:
    """Turn one terminator-stripped line into a message.

    ``":nick!u@h PRIVMSG #chan :hello world"`` gives prefix ``nick!u@h``,
    command ``PRIVMSG`` and params ``("#chan", "hello world")``. A prefix
    with nothing after it yields an empty command.
    """
    if not line.strip(" "):
        return IRCMessage(command="")

    pos = 0
    prefix: str | None = None

    if line.startswith(":"):
        prefix, pos = _scan_until_space(line, 1)
        skipped, pos = _skip_spaces(line, pos)
        if not skipped:
            return IRCMessage(command="", prefix=prefix)

    command, pos = _scan_until_space(line, pos)
    skipped, pos = _skip_spaces(line, pos)
    if not skipped:
        return IRCMessage(command=command, prefix=prefix)

    return IRCMessage(command=command, params=tuple(_scan_params(line, pos)), prefix=prefix)
