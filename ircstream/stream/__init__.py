"""Push-stream primitives and the line transformer."""

from .lines import LineBuffer, LineTransformer, iter_lines, scan_lines, split_lines  # noqa: F401
from .observable import (  # noqa: F401
    Broadcast,
    CallbackObserver,
    Observer,
    Signal,
    Stream,
    StreamIterator,
    Subscription,
)

__all__ = [
    "Broadcast",
    "CallbackObserver",
    "LineBuffer",
    "LineTransformer",
    "Observer",
    "Signal",
    "Stream",
    "StreamIterator",
    "Subscription",
    "iter_lines",
    "scan_lines",
    "split_lines",
]
