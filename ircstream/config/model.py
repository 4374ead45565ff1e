from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientOptions(BaseModel):
    """Connection and identity settings for one client.

    Attributes:
        hostname: IRC server host name.
        username: User name sent in the ``USER`` registration message.
        port: IRC server TCP port.
        nick: Nickname sent in the ``NICK`` registration message.
        real_name: Free-form real name (``realName`` accepted as alias).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hostname: str = Field(min_length=1)
    username: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    nick: str = Field(min_length=1)
    real_name: str = Field(min_length=1, alias="realName")

    @field_validator("hostname", "username", "nick", mode="before")
    @classmethod
    def strip_token(cls, v: Any) -> Any:
        """Trim surrounding whitespace; these values must be single tokens."""
        if isinstance(v, str):
            v = v.strip()
            if " " in v:
                raise ValueError("must not contain spaces")
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientOptions:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
