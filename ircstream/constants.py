"""
Configuration constants for the ircstream client

Tunables that are not part of the per-connection options. Each constant can be
overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


# Transport
CONNECT_TIMEOUT = _get_env_float(
    "CONNECT_TIMEOUT", 30.0
)  # Seconds allowed for the TCP connection to open
READ_CHUNK_SIZE = _get_env_int(
    "READ_CHUNK_SIZE", 4096
)  # Maximum bytes per read from the socket
WIRE_ENCODING = _get_env_str("WIRE_ENCODING", "utf-8")  # Encoding for both directions

# Protocol
LINE_TERMINATOR = "\r\n"
QUIT_LEAVING_REASON = "Leaving"  # Sent when the inbound stream completes
QUIT_ERROR_REASON = "Error"  # Sent when the inbound stream fails

# Configuration file lookup
CONFIG_FILE_ENV = "IRC_CONF_FILE"
DEFAULT_CONFIG_FILE = "ircstream.conf"
