from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

from ferritectl.formatter import format_ttl

NO_EXPIRY = -1
EXPIRED = -2


class KeyType(Enum):
    STRING = "string"
    HASH = "hash"
    LIST = "list"
    SET = "set"
    ZSET = "zset"
    STREAM = "stream"
    NONE = "none"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str) -> Self:
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class KeyRecord:
    """
    A scanned key plus the metadata fetched for it.

    ``type`` and ``ttl`` stay ``None`` until somebody asks the server for
    them; root listings never do, namespace listings always do. ``prefix`` is
    the namespace the record is displayed under, if any.
    """

    key: str
    type: KeyType | None = None
    ttl: int | None = None
    raw_type: str | None = None
    prefix: str = ""

    @property
    def label(self) -> str:
        if self.prefix and self.key.startswith(self.prefix):
            return self.key[len(self.prefix):]
        return self.key

    @property
    def ttl_label(self) -> str:
        if self.ttl is None:
            return ""
        return format_ttl(self.ttl)

    @property
    def tooltip(self) -> str:
        return f"{self.label} ({self.raw_type or 'key'})"


@dataclass
class KeyValue:
    key: str
    type: KeyType
    ttl: int
    value: Any
    raw_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "type": self.raw_type,
            "ttl": "persistent" if self.ttl == NO_EXPIRY else f"{self.ttl}s",
            "value": self.value,
        }
