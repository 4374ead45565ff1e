"""Transport boundary and its asyncio TCP implementation."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..constants import CONNECT_TIMEOUT, READ_CHUNK_SIZE
from ..errors import ClientStateError, TransmissionError
from ..logs.logger import logger
from ..stream import Broadcast, Signal, Stream


class Transport(Protocol):
    """Duplex byte stream the client drives.

    ``connected`` flips to ``True`` once the connection is up; ``data`` emits
    raw chunks and terminates with completion (clean close) or a
    :class:`TransmissionError`.
    """

    connected: Stream[bool]
    data: Stream[bytes]

    def connect(self, host: str, port: int) -> None:
        ...

    def write(self, data: bytes) -> None:
        ...

    def end(self) -> None:
        ...

    def abort(self, error: BaseException | None = None) -> None:
        ...


def _transmission_error(
    message: str, cause: BaseException | None = None, **data: object
) -> TransmissionError:
    error = TransmissionError(message, data=data)
    error.__cause__ = cause
    return error


class AsyncioTransport:
    """TCP transport on top of ``asyncio.open_connection``.

    ``connect`` must be called from within a running event loop; the
    connection is opened and read by a background task owned by the
    transport.
    """

    def __init__(
        self,
        *,
        connect_timeout: float = CONNECT_TIMEOUT,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self.connected: Signal[bool] = Signal(False, name="transport.connected")
        self.data: Broadcast[bytes] = Broadcast(name="transport.data")
        self.connect_timeout = connect_timeout
        self.chunk_size = chunk_size
        self.host: str | None = None
        self.port: int | None = None
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._task: asyncio.Task[None] | None = None
        self._closing = False

    @property
    def closed(self) -> bool:
        return self.data.terminated

    def connect(self, host: str, port: int) -> None:
        if self._task is not None or self.closed:
            raise ClientStateError(
                "transport already used", data={"host": host, "port": port}
            )
        self.host = host
        self.port = port
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(host, port), name=f"irc-transport-{host}:{port}")
        self._task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[None]) -> None:
        """Report a crashed background task and fail ``data`` with it."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        logger.log_event(
            "transport",
            "task_failed",
            level=logging.ERROR,
            host=self.host,
            port=self.port,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        self._close_writer(abort=True)
        self.data.error(_transmission_error("Transport task failed", exc))

    async def _run(self, host: str, port: int) -> None:
        logger.log_event("transport", "connect_start", host=host, port=port)
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=self.connect_timeout
            )
        except TimeoutError as e:
            logger.log_event(
                "transport",
                "connect_timeout",
                level=logging.ERROR,
                host=host,
                port=port,
                timeout=self.connect_timeout,
            )
            self.data.error(_transmission_error("Connection timed out", e, host=host, port=port))
            return
        except OSError as e:
            logger.log_event(
                "transport",
                "connect_failed",
                level=logging.ERROR,
                host=host,
                port=port,
                error=str(e),
            )
            self.data.error(_transmission_error("Connection failed", e, host=host, port=port))
            return

        logger.log_event("transport", "connected", level=logging.DEBUG, host=host, port=port)
        self.connected.set(True)
        await self._read_loop()

    async def _read_loop(self) -> None:
        reader = self._reader
        if reader is None:
            return
        try:
            while not self.closed:
                chunk = await reader.read(self.chunk_size)
                if not chunk:
                    break
                self.data.next(chunk)
        except OSError as e:
            logger.log_event(
                "transport", "read_error", level=logging.ERROR, error=str(e)
            )
            self._close_writer(abort=True)
            self.data.error(_transmission_error("Transmission error", e))
            return

        if self.closed:
            return
        # Peer finished (or we ended our side): close in kind.
        logger.log_event(
            "transport",
            "closed" if self._closing else "peer_closed",
            level=logging.DEBUG if self._closing else logging.WARNING,
        )
        # Subscribers may still write (QUIT) until our side is closed.
        self.data.complete()
        self._close_writer()

    def write(self, data: bytes) -> None:
        if self._writer is None or self._closing or self._writer.is_closing():
            raise _transmission_error("Transport is not writable", size=len(data))
        self._writer.write(data)

    async def drain(self) -> None:
        if self._writer is not None and not self._writer.is_closing():
            await self._writer.drain()

    def end(self) -> None:
        """Close gracefully; ``data`` completes once the socket is down."""
        if self.closed or self._closing:
            return
        self._closing = True
        if self._writer is None:
            # Still connecting: nothing to flush.
            self._cancel_task()
            self.data.complete()
            return
        self._close_writer()

    def abort(self, error: BaseException | None = None) -> None:
        """Tear down immediately; ``data`` errors when ``error`` is given."""
        if self.closed:
            return
        self._closing = True
        self._close_writer(abort=True)
        self._cancel_task()
        if error is None:
            self.data.complete()
        else:
            self.data.error(_transmission_error("Transmission error", error))

    async def wait_closed(self) -> None:
        if self._task is not None:
            # Failures are reported through ``data``; only wait for the end.
            await asyncio.wait({self._task})
        if self._writer is not None:
            try:
                await self._writer.wait_closed()
            except OSError as e:
                logger.log_event(
                    "transport", "close_error", level=logging.DEBUG, error=str(e)
                )

    def _close_writer(self, abort: bool = False) -> None:
        writer = self._writer
        if writer is None or writer.is_closing():
            return
        if abort:
            writer.transport.abort()
        else:
            writer.close()

    def _cancel_task(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()
