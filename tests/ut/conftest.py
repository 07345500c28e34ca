import pytest

from ferritectl.console import Console
from ferritectl.exception import CommandError, TransportError
from ferritectl.retry import ReconnectPolicy
from ferritectl.session import Session
from ferritectl.settings import ConnectionProfile, FerriteSettings
from ferritectl.transport import START_CURSOR

INFO_SERVER = "# Server\r\nferrite_version:0.4.2\r\nuptime_in_seconds:7200\r\n"


class FakeTransport:
    """In-memory stand-in for RedisTransport."""

    def __init__(self, keys=None, types=None, ttls=None, values=None, batches=None):
        self.keys = list(keys or [])
        self.types = dict(types or {})
        self.ttls = dict(ttls or {})
        self.values = dict(values or {})
        self.batches = batches
        self.info_text = INFO_SERVER

        self.fail_scan = False
        self.fail_ping = 0
        self.closed = False
        self.scan_calls = []
        self.commands = []

    async def execute(self, command, *args):
        self.commands.append((command, *args))
        if command == "FAIL":
            raise CommandError("ERR unknown command 'FAIL'")
        if command == "DROP":
            raise TransportError("Connection reset by peer")
        if command == "FLUSHDB":
            self.keys.clear()
            return "OK"
        if command in ("SET",):
            self.values[args[0]] = args[1]
            self.types[args[0]] = "string"
            self.keys.append(args[0])
            return "OK"
        if command in ("GET", "HGETALL", "LRANGE", "SMEMBERS", "ZRANGE", "XRANGE"):
            return self.values.get(args[0])
        return self.values.get(command)

    async def scan(self, cursor, pattern, count):
        self.scan_calls.append((cursor, pattern, count))
        if self.fail_scan:
            raise TransportError("Connection reset by peer")

        if self.batches is not None:
            index = int(cursor)
            next_cursor = START_CURSOR if index + 1 >= len(self.batches) else str(index + 1)
            return next_cursor, list(self.batches[index])

        prefix = pattern.rstrip("*")
        return START_CURSOR, [k for k in self.keys if k.startswith(prefix)]

    async def type(self, key):
        return self.types.get(key, "none")

    async def ttl(self, key):
        return self.ttls.get(key, -1)

    async def info(self, section=None):
        return self.info_text

    async def ping(self):
        if self.fail_ping:
            self.fail_ping -= 1
            raise TransportError("Connection refused")

    async def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return FakeTransport(
        keys=["user:1", "user:2", "session:abc", "config"],
        types={"user:1": "hash", "user:2": "string", "session:abc": "string", "config": "string"},
        ttls={"user:2": 90, "session:abc": 3600},
        values={"user:1": ["name", "ada", "lang", "en"], "user:2": "bob", "config": "on"},
    )


@pytest.fixture
def profile():
    return ConnectionProfile(host="localhost", port=6379)


@pytest.fixture
def settings(profile):
    return FerriteSettings(connections=[profile])


@pytest.fixture
def session(settings, transport):
    return Session(
        settings,
        transport_factory=lambda _: transport,
        policy=ReconnectPolicy(step=0, maximum=0),
    )


@pytest.fixture
def answers():
    return []


@pytest.fixture
def console(settings, transport, answers):
    return Console.create(
        settings,
        transport_factory=lambda _: transport,
        ask=lambda _: answers.pop(0),
        policy=ReconnectPolicy(step=0, maximum=0),
    )
