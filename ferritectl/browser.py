import asyncio
import logging
from enum import Enum
from typing import Any

from ferritectl.exception import FerriteError, ScanCancelled
from ferritectl.grouping import group_keys
from ferritectl.model.key import KeyRecord, KeyType, KeyValue
from ferritectl.model.namespace import BrowseEntry, Placeholder
from ferritectl.scanner import DEFAULT_BATCH_SIZE, KeyspaceScanner
from ferritectl.session import Session
from ferritectl.transport import Transport

CONNECT_PLACEHOLDER = "Connect to browse keys"
ERROR_PLACEHOLDER = "Error loading keys"


class BrowseState(Enum):
    DISCONNECTED = "disconnected"
    ROOT_LISTED = "root_listed"
    NAMESPACE_LISTED = "namespace_listed"
    ERRORED = "errored"


class KeyBrowser:
    """
    Namespace-aware view over the keyspace of the session's server.

    Every listing is recomputed from a fresh scan. Failures are not retried
    and never yield a partial listing: the browser switches to ``ERRORED``
    and returns a single placeholder entry instead.
    """

    def __init__(
        self,
        session: Session,
        root_limit: int = 500,
        namespace_limit: int = 200,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self._session = session
        self.root_limit = root_limit
        self.namespace_limit = namespace_limit
        self.batch_size = batch_size
        self.state = BrowseState.DISCONNECTED
        self._logger = logging.getLogger("ferritectl.browser")

    def _scanner(self) -> KeyspaceScanner:
        return KeyspaceScanner(self._session.transport, batch_size=self.batch_size)

    async def list_root(self, *, cancel: asyncio.Event | None = None) -> list[BrowseEntry]:
        if not self._session.is_connected:
            self.state = BrowseState.DISCONNECTED
            return [Placeholder(CONNECT_PLACEHOLDER)]

        try:
            keys = await self._scanner().scan_keys("*", self.root_limit, cancel=cancel)
        except ScanCancelled:
            raise
        except FerriteError as ex:
            return self._errored(ex)

        self.state = BrowseState.ROOT_LISTED
        return group_keys(keys)

    async def expand(self, prefix: str, *, cancel: asyncio.Event | None = None) -> list[BrowseEntry]:
        if not self._session.is_connected:
            self.state = BrowseState.DISCONNECTED
            return [Placeholder(CONNECT_PLACEHOLDER)]

        try:
            transport = self._session.transport
            keys = await self._scanner().scan_keys(f"{prefix}*", self.namespace_limit, cancel=cancel)
            records = [await self._describe(transport, key, prefix) for key in keys]
        except ScanCancelled:
            raise
        except FerriteError as ex:
            return self._errored(ex)

        self.state = BrowseState.NAMESPACE_LISTED
        return records

    async def refresh(self, *, cancel: asyncio.Event | None = None) -> list[BrowseEntry]:
        return await self.list_root(cancel=cancel)

    async def inspect(self, key: str) -> KeyValue:
        transport = self._session.transport
        raw_type = await transport.type(key)
        ttl = await transport.ttl(key)
        key_type = KeyType.parse(raw_type)
        value = await fetch_value(transport, key, key_type)
        return KeyValue(key=key, type=key_type, ttl=ttl, value=value, raw_type=raw_type)

    @staticmethod
    async def _describe(transport: Transport, key: str, prefix: str) -> KeyRecord:
        raw_type = await transport.type(key)
        ttl = await transport.ttl(key)
        return KeyRecord(
            key=key,
            type=KeyType.parse(raw_type),
            ttl=ttl,
            raw_type=raw_type,
            prefix=prefix,
        )

    def _errored(self, ex: Exception) -> list[BrowseEntry]:
        self._logger.warning(f"Loading keys failed: {ex}")
        self.state = BrowseState.ERRORED
        return [Placeholder(ERROR_PLACEHOLDER)]


def _pairs(flat: list[Any]) -> list[tuple[Any, Any]]:
    return list(zip(flat[0::2], flat[1::2]))


async def fetch_value(transport: Transport, key: str, key_type: KeyType) -> Any:
    match key_type:
        case KeyType.STRING:
            return await transport.execute("GET", key)
        case KeyType.HASH:
            reply = await transport.execute("HGETALL", key)
            if isinstance(reply, dict):
                return reply
            return dict(_pairs(reply))
        case KeyType.LIST:
            return await transport.execute("LRANGE", key, 0, -1)
        case KeyType.SET:
            return await transport.execute("SMEMBERS", key)
        case KeyType.ZSET:
            return await transport.execute("ZRANGE", key, 0, -1, "WITHSCORES")
        case KeyType.STREAM:
            return await transport.execute("XRANGE", key, "-", "+")
        case KeyType.NONE:
            return None
        case KeyType.UNKNOWN:
            # no fetch command is known for this type; the raw name is kept on the record
            return None
