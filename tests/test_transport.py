from __future__ import annotations

import asyncio
import logging
import socket

import pytest
import pytest_asyncio

from ircstream.config import ClientOptions
from ircstream.errors import ClientStateError, TransmissionError
from ircstream.irc import AsyncioTransport, ConnectionState, IRCClient, IRCMessage
from tests.fixtures.sample_configs import VALID_OPTIONS


class ScriptedServer:
    """Local IRC-ish server recording what the client sends."""

    def __init__(self) -> None:
        self.received: list[str] = []
        self.writer: asyncio.StreamWriter | None = None
        self.client_connected = asyncio.Event()
        self._server: asyncio.Server | None = None
        self.port = 0

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.writer = writer
        self.client_connected.set()
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                self.received.append(line.decode("utf-8"))
        except ConnectionError:
            pass
        writer.close()

    async def wait_for_lines(self, count: int) -> list[str]:
        for _ in range(200):
            if len(self.received) >= count:
                return self.received
            await asyncio.sleep(0.01)
        raise AssertionError(f"expected {count} lines, got {self.received}")

    async def send(self, data: bytes) -> None:
        assert self.writer is not None
        self.writer.write(data)
        await self.writer.drain()

    async def hang_up(self) -> None:
        assert self.writer is not None
        self.writer.close()
        await self.writer.wait_closed()

    async def half_close(self) -> None:
        assert self.writer is not None
        self.writer.write_eof()
        await self.writer.drain()

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()


@pytest_asyncio.fixture
async def server():
    srv = ScriptedServer()
    await srv.start()
    yield srv
    await srv.stop()


def _options(port: int) -> ClientOptions:
    return ClientOptions.from_dict({**VALID_OPTIONS, "hostname": "127.0.0.1", "port": port})


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.asyncio
async def test_handshake_and_keepalive_over_tcp(server):
    client = IRCClient(_options(server.port))
    client.connect()
    await asyncio.wait_for(server.client_connected.wait(), timeout=2)
    assert await server.wait_for_lines(2) == [
        "USER streamer . . :Stream Bot\r\n",
        "NICK :streambot\r\n",
    ]
    assert client.state is ConnectionState.CONNECTED

    welcome = asyncio.ensure_future(client.command_stream("001").first())
    await asyncio.sleep(0)
    await server.send(b":srv 001 streambot :Wel")
    await server.send(b"come\r\nPING :tok\r\n")
    message = await asyncio.wait_for(welcome, timeout=2)
    assert message == IRCMessage("001", ("streambot", "Welcome"), prefix="srv")
    assert (await server.wait_for_lines(3))[2] == "PONG :tok\r\n"

    client.quit()
    assert (await server.wait_for_lines(4))[3] == "QUIT :Leaving\r\n"
    await asyncio.wait_for(client.transport.wait_closed(), timeout=2)
    assert client.state is ConnectionState.TERMINATED


@pytest.mark.asyncio
async def test_server_hang_up_completes_message_stream(server):
    client = IRCClient(_options(server.port))
    client.connect()
    await asyncio.wait_for(server.client_connected.wait(), timeout=2)
    await server.wait_for_lines(2)

    async def collect() -> list[str]:
        async with client.messages.iterate() as messages:
            return [m.command async for m in messages]

    collector = asyncio.ensure_future(collect())
    await asyncio.sleep(0)
    await server.send(b"NOTICE * :bye\r\n")
    await server.hang_up()
    assert await asyncio.wait_for(collector, timeout=2) == ["NOTICE"]
    assert client.state is ConnectionState.TERMINATED


@pytest.mark.asyncio
async def test_connection_refused_errors_message_stream():
    client = IRCClient(_options(_free_port()))
    client.connect()
    with pytest.raises(TransmissionError) as excinfo:
        await asyncio.wait_for(client.messages.first(), timeout=5)
    assert isinstance(excinfo.value.__cause__, OSError)
    assert client.state is ConnectionState.TERMINATED


@pytest.mark.asyncio
async def test_transport_rejects_second_connect(server):
    transport = AsyncioTransport()
    transport.connect("127.0.0.1", server.port)
    with pytest.raises(ClientStateError):
        transport.connect("127.0.0.1", server.port)
    transport.abort()
    await transport.wait_closed()
    assert transport.closed


@pytest.mark.asyncio
async def test_write_before_connect_raises():
    transport = AsyncioTransport()
    with pytest.raises(TransmissionError):
        transport.write(b"PING :x\r\n")


@pytest.mark.asyncio
async def test_abort_with_error_fails_data_stream(server):
    transport = AsyncioTransport()
    errors: list[BaseException] = []
    transport.data.subscribe(on_error=errors.append)
    transport.connect("127.0.0.1", server.port)
    await asyncio.wait_for(transport.connected.first(lambda up: up), timeout=2)
    transport.abort(ConnectionResetError("reset"))
    await transport.wait_closed()
    assert len(errors) == 1
    assert isinstance(errors[0], TransmissionError)
    assert isinstance(errors[0].__cause__, ConnectionResetError)


@pytest.mark.asyncio
async def test_server_half_close_still_receives_quit_leaving(server):
    client = IRCClient(_options(server.port))
    completed: list[bool] = []
    client.messages.subscribe(on_complete=lambda: completed.append(True))
    client.connect()
    await asyncio.wait_for(server.client_connected.wait(), timeout=2)
    await server.wait_for_lines(2)

    await server.half_close()
    assert (await server.wait_for_lines(3))[2] == "QUIT :Leaving\r\n"
    await asyncio.wait_for(client.transport.wait_closed(), timeout=2)
    assert completed == [True]
    assert client.state is ConnectionState.TERMINATED


@pytest.mark.asyncio
async def test_unexpected_task_failure_is_logged_and_fails_data(monkeypatch, caplog):
    async def broken_open_connection(host, port):
        raise RuntimeError("resolver bug")

    monkeypatch.setattr(asyncio, "open_connection", broken_open_connection)
    caplog.set_level(logging.ERROR, logger="ircstream")
    transport = AsyncioTransport()
    errors: list[BaseException] = []
    transport.data.subscribe(on_error=errors.append)
    transport.connect("127.0.0.1", 6667)
    await asyncio.wait_for(transport.wait_closed(), timeout=2)

    assert len(errors) == 1
    assert isinstance(errors[0], TransmissionError)
    assert isinstance(errors[0].__cause__, RuntimeError)
    assert transport.closed
    assert any("crashed: RuntimeError" in r.getMessage() for r in caplog.records)
