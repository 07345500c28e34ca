import re
from dataclasses import dataclass

SECTIONS: dict[str, str] = {
    "server": "Server",
    "memory": "Memory",
    "clients": "Clients",
    "stats": "Stats",
    "keyspace": "Keyspace",
    "persistence": "Persistence",
}

KB = 1024
MB = 1024 * KB
GB = 1024 * MB

_VERSION_RE = re.compile(r"ferrite_version:([^\r\n]+)")


@dataclass
class InfoEntry:
    key: str
    value: str


def extract_version(info: str) -> str:
    match = _VERSION_RE.search(info)
    if match is None:
        return "unknown"
    return match.group(1)


def parse_info_section(info: str, section: str) -> list[InfoEntry]:
    """
    Collect the ``key:value`` lines of one INFO section.

    The section starts at its ``# Name`` header (compared case-insensitively)
    and ends at the next header. Values are split on the first colon only, so
    ``executable:/usr/bin/ferrite`` keeps its path intact.
    """
    entries: list[InfoEntry] = []
    header = f"# {section}".lower()
    in_section = False

    for line in info.splitlines():
        trimmed = line.strip()
        if trimmed.lower().startswith(header):
            in_section = True
            continue
        if trimmed.startswith("#") and in_section:
            break
        if in_section and ":" in trimmed:
            key, value = trimmed.split(":", 1)
            key = key.strip()
            if key:
                entries.append(InfoEntry(key, format_info_value(key, value.strip())))

    return entries


def format_info_value(key: str, value: str) -> str:
    if "memory" in key and value.isdigit():
        size = int(value)
        if size > GB:
            return f"{size / GB:.2f} GB"
        if size > MB:
            return f"{size / MB:.2f} MB"
        if size > KB:
            return f"{size / KB:.2f} KB"

    if key == "uptime_in_seconds" and value.isdigit():
        secs = int(value)
        if secs > 86400:
            return f"{secs // 86400}d {(secs % 86400) // 3600}h"
        if secs > 3600:
            return f"{secs // 3600}h {(secs % 3600) // 60}m"
        return f"{secs // 60}m {secs % 60}s"

    return value
