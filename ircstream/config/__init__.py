"""Client configuration: validated options model and loader."""

from .loader import ENV_OVERRIDES, load_options, read_config_file  # noqa: F401
from .model import ClientOptions  # noqa: F401

__all__ = ["ClientOptions", "ENV_OVERRIDES", "load_options", "read_config_file"]
