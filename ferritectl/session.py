import asyncio
import logging
from enum import Enum
from typing import Callable

from ferritectl.exception import ConnectError, NotConnectedError
from ferritectl.retry import ReconnectPolicy
from ferritectl.settings import ConnectionProfile, FerriteSettings
from ferritectl.telemetry import extract_version
from ferritectl.transport import RedisTransport, Transport

TransportFactory = Callable[[ConnectionProfile], Transport]

ConnectListener = Callable[[ConnectionProfile], None]

DisconnectListener = Callable[[], None]


class SessionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


def connect_hint(message: str) -> str:
    lowered = message.lower()
    if "timeout" in lowered or "timed out" in lowered:
        return " Check that the server is reachable and the port is correct."
    if "refused" in lowered:
        return " Ensure the Ferrite server is running on the specified host and port."
    if "auth" in lowered or "password" in lowered:
        return " Verify your authentication password in the connection settings."
    return ""


class Session:
    """
    Owns the single connection to a Ferrite server.

    Components receive the session explicitly and reach the server through
    ``session.transport``; the session is the only place that opens, closes
    or replaces that transport.
    """

    def __init__(
        self,
        settings: FerriteSettings,
        transport_factory: TransportFactory = RedisTransport.from_profile,
        policy: ReconnectPolicy | None = None,
    ) -> None:
        self.settings = settings
        self._transport_factory = transport_factory
        self._policy = policy or ReconnectPolicy()

        self._transport: Transport | None = None
        self._profile: ConnectionProfile | None = None
        self.state = SessionState.DISCONNECTED
        self.server_version: str | None = None

        self._on_connect: list[ConnectListener] = []
        self._on_disconnect: list[DisconnectListener] = []

        self._logger = logging.getLogger("ferritectl.session")

    @property
    def is_connected(self) -> bool:
        return self._transport is not None and self.state == SessionState.CONNECTED

    @property
    def profile(self) -> ConnectionProfile | None:
        return self._profile

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            raise NotConnectedError("Not connected to Ferrite")
        return self._transport

    def on_connect(self, callback: ConnectListener) -> None:
        self._on_connect.append(callback)

    def on_disconnect(self, callback: DisconnectListener) -> None:
        self._on_disconnect.append(callback)

    async def connect(self, profile: ConnectionProfile) -> None:
        if self._transport is not None:
            await self.disconnect()

        self.state = SessionState.CONNECTING
        transport = self._transport_factory(profile)
        self._policy.reset()

        while True:
            try:
                await transport.ping()
                info = await transport.info("server")
                break
            except Exception as ex:
                delay = self._policy.next_delay()
                if delay is None:
                    self.state = SessionState.DISCONNECTED
                    await self._close_quietly(transport)
                    message = str(ex) or "Unknown error"
                    raise ConnectError(f"Failed to connect: {message}.{connect_hint(message)}") from ex

                self._logger.warning(
                    f"Connect failed to {profile.address}: {ex}. "
                    f"Retrying in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

        self._transport = transport
        self._profile = profile
        self.server_version = extract_version(info)
        self.state = SessionState.CONNECTED

        self._logger.info(f"Connected to Ferrite at {profile.address}")
        self._logger.info(f"Server version: {self.server_version}")

        for callback in self._on_connect:
            callback(profile)

    async def disconnect(self) -> None:
        if self._transport is None:
            return

        transport = self._transport
        self._transport = None
        self._profile = None
        self.server_version = None
        self.state = SessionState.DISCONNECTED

        await self._close_quietly(transport)
        self._logger.info("Disconnected from Ferrite")

        for callback in self._on_disconnect:
            callback()

    async def _close_quietly(self, transport: Transport) -> None:
        try:
            await transport.close()
        except Exception as ex:
            self._logger.debug(f"Error while closing transport: {ex}")
