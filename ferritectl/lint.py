import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

VALID_SECTIONS = (
    "server",
    "storage",
    "persistence",
    "logging",
    "metrics",
    "tls",
    "auth",
    "cluster",
    "replication",
)

TYPOS = {
    "prot": "port",
    "hosr": "host",
    "databse": "database",
    "pasword": "password",
    "enbled": "enabled",
}

_SECTION_RE = re.compile(r"^\s*\[([^\]]+)\]")
_KEY_RE = re.compile(r"^\s*([a-z_]+)\s*=")
_PORT_RE = re.compile(r"port\s*=\s*(\d+)")


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    line: int
    severity: Severity
    message: str

    def __str__(self) -> str:
        return f"{self.line + 1}: {self.severity.value}: {self.message}"


def lint_config(text: str) -> list[Diagnostic]:
    """
    Static checks for a ``ferrite.toml`` file, one line at a time.

    Lines are numbered from zero. The checks are textual only: unknown
    sections, common key misspellings and out-of-range ports.
    """
    problems: list[Diagnostic] = []

    for i, line in enumerate(text.split("\n")):
        section_match = _SECTION_RE.match(line)
        if section_match:
            section = section_match.group(1).split(".")[0]
            if section not in VALID_SECTIONS:
                problems.append(Diagnostic(i, Severity.WARNING, f"Unknown section: {section}"))

        key_match = _KEY_RE.match(line)
        if key_match and key_match.group(1) in TYPOS:
            problems.append(Diagnostic(i, Severity.ERROR, f"Did you mean '{TYPOS[key_match.group(1)]}'?"))

        port_match = _PORT_RE.search(line)
        if port_match:
            port = int(port_match.group(1))
            if port < 1 or port > 65535:
                problems.append(Diagnostic(i, Severity.ERROR, "Port must be between 1 and 65535"))

    return problems


def lint_file(path: Path) -> list[Diagnostic]:
    return lint_config(path.read_text(encoding="utf-8"))
