import pytest

from ircstream.config import ClientOptions
from ircstream.irc import IRCClient
from tests.fixtures.sample_configs import VALID_OPTIONS
from tests.fixtures.transport import FakeTransport


@pytest.fixture
def options() -> ClientOptions:
    return ClientOptions.from_dict(VALID_OPTIONS)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(options: ClientOptions, transport: FakeTransport) -> IRCClient:
    return IRCClient(options, transport)
