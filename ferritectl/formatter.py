import json
from enum import StrEnum
from typing import Any

NIL = "(nil)"


class OutputFormat(StrEnum):
    JSON = "json"
    TABLE = "table"
    RAW = "raw"


def _decode(value: Any) -> Any:
    # replies may carry bytes anywhere when the client does not decode them
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_decode(v) for v in value]
    if isinstance(value, dict):
        return {_decode(k): _decode(v) for k, v in value.items()}
    return value


def _coerce(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def format_result(value: Any, mode: OutputFormat | str) -> str:
    """
    Render a server reply for display.

    ``None`` is always ``(nil)``. ``table`` numbers the elements of a
    sequence reply the way redis-cli does, and degrades to a plain string
    for anything else. Unknown modes render like ``raw``.
    """
    if value is None:
        return NIL

    if mode == OutputFormat.JSON:
        return json.dumps(_decode(value), indent=2, ensure_ascii=False, default=str)

    if mode == OutputFormat.TABLE and isinstance(value, (list, tuple)):
        return "\n".join(
            f"{i}) {json.dumps(item, ensure_ascii=False, separators=(',', ':'), default=str)}"
            for i, item in enumerate(_decode(value), start=1)
        )

    return _coerce(value)


def format_ttl(ttl: int) -> str:
    if ttl == -1:
        return "persistent"
    if ttl == -2:
        return "expired"
    if ttl < 60:
        return f"{ttl}s"
    if ttl < 3600:
        return f"{ttl // 60}m"
    return f"{ttl // 3600}h"
