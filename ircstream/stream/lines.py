"""Chunk-to-line transformation.

Network reads arrive in arbitrary pieces. The transformer keeps the
unterminated tail of the previous chunk and, for every new chunk, emits the
lines it completes with their ``\\n`` / ``\\r\\n`` terminator stripped.
"""

from __future__ import annotations

import codecs
import re
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass

from ..constants import WIRE_ENCODING
from .observable import Observer, Stream, Subscription

# A run is one or more non-newline characters ending in a terminator or at the
# end of the buffer. Bare "\n" runs (empty lines) never match.
_RUN_RE = re.compile(r"[^\n]+(?:\r?\n|\Z)")
_TERMINATOR_RE = re.compile(r"\r?\n\Z")


@dataclass(frozen=True, slots=True)
class LineBuffer:
    """Result of one scan step.

    ``complete`` holds only the lines finished by the latest chunk, not
    history. ``incomplete`` is the unterminated tail carried into the next
    step.
    """

    complete: tuple[str, ...] = ()
    incomplete: str = ""


def _trim_terminator(run: str) -> str:
    return _TERMINATOR_RE.sub("", run)


def scan_lines(buffer: LineBuffer, data: str) -> LineBuffer:
    """Fold one decoded chunk into ``buffer`` and return the next buffer."""
    runs = _RUN_RE.findall(buffer.incomplete + data)
    if not runs:
        return LineBuffer()
    if runs[-1].endswith("\n"):
        return LineBuffer(tuple(_trim_terminator(r) for r in runs), "")
    return LineBuffer(tuple(_trim_terminator(r) for r in runs[:-1]), runs[-1])


class LineTransformer:
    """Stateful wrapper around :func:`scan_lines` for a single connection.

    Byte chunks go through an incremental decoder so a multi-byte character
    split across two reads is reassembled before scanning.
    """

    def __init__(self, encoding: str = WIRE_ENCODING) -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = LineBuffer()

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    @property
    def pending(self) -> str:
        return self._buffer.incomplete

    def feed(self, chunk: bytes | str) -> list[str]:
        if isinstance(chunk, str):
            text = chunk
        else:
            text = self._decoder.decode(bytes(chunk))
        self._buffer = scan_lines(self._buffer, text)
        return list(self._buffer.complete)


def split_lines(chunks: Stream[bytes | str], encoding: str = WIRE_ENCODING) -> Stream[str]:
    """Stream of complete lines over a stream of raw chunks.

    Each subscription owns its own :class:`LineTransformer`; completion and
    errors of ``chunks`` are forwarded unchanged.
    """

    def subscribe(observer: Observer[str]) -> Subscription:
        transformer = LineTransformer(encoding)

        def on_next(chunk: bytes | str) -> None:
            for line in transformer.feed(chunk):
                observer.on_next(line)

        return chunks.subscribe(on_next, observer.on_complete, observer.on_error)

    return Stream(subscribe)


async def iter_lines(
    chunks: AsyncIterable[bytes | str], encoding: str = WIRE_ENCODING
) -> AsyncIterator[str]:
    """Async-generator form of the transformer for pull-style readers."""
    transformer = LineTransformer(encoding)
    async for chunk in chunks:
        for line in transformer.feed(chunk):
            yield line
