import asyncio

import pytest
from conftest import FakeTransport

from ferritectl.exception import ConnectError, NotConnectedError
from ferritectl.retry import ReconnectPolicy
from ferritectl.session import Session, SessionState, connect_hint


@pytest.mark.ut
def test_connect_reads_server_version(session, profile, transport):
    asyncio.run(session.connect(profile))

    assert session.is_connected
    assert session.state is SessionState.CONNECTED
    assert session.profile == profile
    assert session.server_version == "0.4.2"
    assert session.transport is transport


@pytest.mark.ut
def test_transport_requires_connection(session):
    with pytest.raises(NotConnectedError):
        _ = session.transport


@pytest.mark.ut
def test_connect_retries_then_succeeds(settings, profile):
    transport = FakeTransport()
    transport.fail_ping = 2
    policy = ReconnectPolicy(step=0, maximum=0, max_retries=3)
    session = Session(settings, transport_factory=lambda _: transport, policy=policy)

    asyncio.run(session.connect(profile))

    assert session.is_connected
    assert policy.attempts == 2


@pytest.mark.ut
def test_connect_gives_up_with_hint(settings, profile):
    transport = FakeTransport()
    transport.fail_ping = 10
    policy = ReconnectPolicy(step=0, maximum=0, max_retries=2)
    session = Session(settings, transport_factory=lambda _: transport, policy=policy)

    with pytest.raises(ConnectError, match="Ensure the Ferrite server is running"):
        asyncio.run(session.connect(profile))

    assert not session.is_connected
    assert session.state is SessionState.DISCONNECTED
    assert transport.closed


@pytest.mark.ut
def test_listeners_and_disconnect(session, profile, transport):
    events = []
    session.on_connect(lambda p: events.append(("connect", p.address)))
    session.on_disconnect(lambda: events.append(("disconnect",)))

    async def scenario():
        await session.connect(profile)
        await session.disconnect()
        await session.disconnect()

    asyncio.run(scenario())

    assert events == [("connect", "localhost:6379"), ("disconnect",)]
    assert transport.closed
    assert session.profile is None
    assert session.server_version is None


@pytest.mark.ut
def test_reconnect_replaces_previous_transport(settings, profile):
    transports = [FakeTransport(), FakeTransport()]
    created = iter(transports)
    session = Session(settings, transport_factory=lambda _: next(created))

    async def scenario():
        await session.connect(profile)
        await session.connect(profile)

    asyncio.run(scenario())

    assert transports[0].closed
    assert session.transport is transports[1]


@pytest.mark.ut
@pytest.mark.parametrize(
    "message, hint",
    [
        ("Timeout connecting to server", "reachable"),
        ("Connection refused", "running"),
        ("NOAUTH Authentication required", "password"),
        ("something else", ""),
    ],
)
def test_connect_hint(message, hint):
    assert hint in connect_hint(message)
    if not hint:
        assert connect_hint(message) == ""


@pytest.mark.ut
def test_reconnect_policy_schedule():
    policy = ReconnectPolicy(step=0.5, maximum=1.0, max_retries=3)
    assert [policy.next_delay() for _ in range(4)] == [0.5, 1.0, 1.0, None]
    policy.reset()
    assert policy.attempts == 0
