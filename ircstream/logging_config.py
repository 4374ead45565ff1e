r"""
Logging configuration for processes embedding the ircstream client.

The library itself only logs through ``ircstream.logs.logger``; entry points
call :func:`configure_logging` once to get colored root-level output for
everything else (asyncio, third-party libraries).
"""

import logging
import os
import sys

import colorlog


class LoggerConfigurator:
    """Handles root logging configuration using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, config=None):
        """Initialize the configurator.

        Args:
            config: Optional mapping; ``level`` overrides the DEBUG env switch.
        """
        self.config = config or {}

    def resolve_level(self) -> int:
        if "level" in self.config:
            return int(self.config["level"])
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self) -> None:
        """Configure the root logger with colored output on stderr.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        """
        log_level = self.resolve_level()
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.build_formatter())

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

        # The client logger owns a console handler already; avoid double output.
        logging.getLogger("ircstream").propagate = False

        # asyncio is chatty at DEBUG about selector internals
        logging.getLogger("asyncio").setLevel(max(log_level, logging.INFO))


def configure_logging(config=None) -> None:
    LoggerConfigurator(config).configure()
