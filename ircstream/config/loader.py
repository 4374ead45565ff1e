"""Client options loading from a JSON file plus environment overrides."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from ..errors import ConfigError
from ..logs.logger import logger
from .model import ClientOptions

# Environment variable -> option field
ENV_OVERRIDES: dict[str, str] = {
    "IRC_HOSTNAME": "hostname",
    "IRC_PORT": "port",
    "IRC_USERNAME": "username",
    "IRC_NICK": "nick",
    "IRC_REALNAME": "real_name",
}


def read_config_file(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the raw options mapping from ``path``.

    Returns an empty dict when the file does not exist.

    Raises:
        ConfigError: If the file is unreadable or not a JSON object.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        raise ConfigError(
            f"Cannot read config file: {e}", data={"path": str(path)}
        ) from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object", data={"path": str(path)})
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    return {
        field: environ[name]
        for name, field in ENV_OVERRIDES.items()
        if environ.get(name)
    }


def load_options(
    path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientOptions:
    """Build validated :class:`ClientOptions`.

    The file comes from ``path``, else ``$IRC_CONF_FILE``, else
    ``ircstream.conf``; ``IRC_*`` environment variables override its fields.

    Raises:
        ConfigError: If nothing is configured or validation fails.
    """
    env = os.environ if environ is None else environ
    config_path = Path(path or env.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE)
    raw = read_config_file(config_path)
    overrides = _env_overrides(env)
    if overrides:
        # Overrides use field names; drop a file alias for the same field.
        if "real_name" in overrides:
            raw.pop("realName", None)
        raw.update(overrides)
    if not raw:
        logger.log_event(
            "config", "missing", level=logging.ERROR, path=str(config_path)
        )
        raise ConfigError("No configuration found", data={"path": str(config_path)})
    try:
        options = ClientOptions.from_dict(raw)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        logger.log_event(
            "config",
            "invalid",
            level=logging.ERROR,
            path=str(config_path),
            fields=", ".join(fields),
        )
        raise ConfigError(
            f"Invalid configuration: {', '.join(fields)}",
            data={"path": str(config_path), "fields": fields},
        ) from e
    logger.log_event(
        "config",
        "loaded",
        level=logging.DEBUG,
        path=str(config_path),
        hostname=options.hostname,
        port=options.port,
    )
    return options
