import logging
from typing import Any, Protocol, Self

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import RedisError, ResponseError

from ferritectl.exception import CommandError, TransportError
from ferritectl.settings import ConnectionProfile

START_CURSOR = "0"


class Transport(Protocol):
    async def execute(self, command: str, *args: Any) -> Any:
        ...

    async def scan(self, cursor: str, pattern: str, count: int) -> tuple[str, list[str]]:
        ...

    async def type(self, key: str) -> str:
        ...

    async def ttl(self, key: str) -> int:
        ...

    async def info(self, section: str | None = None) -> str:
        ...

    async def ping(self) -> None:
        ...

    async def close(self) -> None:
        ...


class RedisTransport:
    """
    Request/reply transport over redis-py's asyncio client.

    Response callbacks are dropped so every command, typed helpers included,
    returns the reply exactly as the server sent it (``OK`` stays ``OK``,
    ``INFO`` stays text). Commands are sent exactly once: redis-py's own retry
    is configured with zero attempts and nothing here retries either.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client
        self._client.response_callbacks.clear()
        self._logger = logging.getLogger("ferritectl.transport")

    @classmethod
    def from_profile(cls, profile: ConnectionProfile) -> Self:
        client = redis.Redis(
            host=profile.host,
            port=profile.port,
            password=profile.password,
            db=profile.database,
            socket_connect_timeout=profile.connect_timeout,
            decode_responses=True,
            retry=Retry(NoBackoff(), 0),
        )
        return cls(client)

    async def execute(self, command: str, *args: Any) -> Any:
        self._logger.debug(f"> {command} {args}")
        try:
            return await self._client.execute_command(command, *args)
        except ResponseError as ex:
            raise CommandError(str(ex)) from ex
        except RedisError as ex:
            raise TransportError(str(ex)) from ex

    async def scan(self, cursor: str, pattern: str, count: int) -> tuple[str, list[str]]:
        reply = await self.execute("SCAN", cursor, "MATCH", pattern, "COUNT", count)
        next_cursor, keys = reply
        return str(next_cursor), list(keys)

    async def type(self, key: str) -> str:
        return str(await self.execute("TYPE", key))

    async def ttl(self, key: str) -> int:
        return int(await self.execute("TTL", key))

    async def info(self, section: str | None = None) -> str:
        if section:
            return await self.execute("INFO", section)
        return await self.execute("INFO")

    async def ping(self) -> None:
        await self.execute("PING")

    async def close(self) -> None:
        await self._client.aclose()
