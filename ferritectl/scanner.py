import asyncio
import logging

from ferritectl.exception import ScanCancelled, ScanError
from ferritectl.transport import START_CURSOR, Transport

DEFAULT_BATCH_SIZE = 100


class KeyspaceScanner:
    """
    Bounded, cursor-based enumeration of the keyspace.

    The result is best effort: SCAN gives no snapshot over a live keyspace,
    so keys written or deleted meanwhile may be missing or, after a rehash,
    repeated. Nothing is de-duplicated. ``limit`` bounds the number of round
    trips and the memory held, not the accuracy of the listing.
    """

    def __init__(self, transport: Transport, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self._transport = transport
        self._batch_size = batch_size
        self._logger = logging.getLogger("ferritectl.scanner")

    async def scan_keys(
        self,
        pattern: str,
        limit: int,
        *,
        cancel: asyncio.Event | None = None
    ) -> list[str]:
        if limit < 1:
            return []

        keys: list[str] = []
        cursor = START_CURSOR
        batches = 0

        while True:
            if cancel is not None and cancel.is_set():
                raise ScanCancelled(f"Scan of '{pattern}' cancelled after {batches} batches")

            try:
                cursor, batch = await self._transport.scan(cursor, pattern, self._batch_size)
            except Exception as ex:
                raise ScanError(f"Scan of '{pattern}' failed: {ex}") from ex

            batches += 1
            keys.extend(batch)
            self._logger.debug(
                f"Batch {batches} for '{pattern}': {len(batch)} keys, cursor={cursor}"
            )

            if cursor == START_CURSOR or len(keys) >= limit:
                break

        return sorted(keys[:limit])
