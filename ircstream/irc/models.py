"""Shared IRC data models."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto


class ConnectionState(Enum):
    IDLE = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    TERMINATED = auto()


@dataclass(frozen=True, slots=True)
class IRCMessage:
    """One protocol line: ``[':' prefix SP] command [SP param]*``.

    ``params`` is always stored as a tuple so messages compare and hash by
    value regardless of how they were built.
    """

    command: str
    params: tuple[str, ...] = field(default=())
    prefix: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.params, tuple):
            object.__setattr__(self, "params", tuple(self.params))

    @classmethod
    def build(cls, command: str, params: Iterable[str] = (), prefix: str | None = None) -> IRCMessage:
        return cls(command=command, params=tuple(params), prefix=prefix)

    @property
    def nick(self) -> str | None:
        """Nickname part of a ``nick!user@host`` prefix."""
        if not self.prefix:
            return None
        nick = self.prefix.split("!", 1)[0]
        return nick.split("@", 1)[0]

    @property
    def trailing(self) -> str | None:
        return self.params[-1] if self.params else None
