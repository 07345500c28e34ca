import json
from pathlib import Path
from typing import Awaitable, Callable

from ferritectl.catalog import complete, lookup
from ferritectl.console import Console
from ferritectl.exception import UsageError
from ferritectl.formatter import OutputFormat
from ferritectl.model.key import KeyRecord
from ferritectl.model.namespace import BrowseEntry, NamespaceGroup, Placeholder
from ferritectl.parser import tokenize
from ferritectl.scanner import KeyspaceScanner
from ferritectl.telemetry import SECTIONS, parse_info_section

CommandHandler = Callable[[Console, str], Awaitable[str | None]]

COMMANDS: dict[str, CommandHandler] = {}

PREFIX = "."


def command(name):
    def decorator(fn):
        COMMANDS[name] = fn
        return fn
    return decorator


def render_entries(entries: list[BrowseEntry]) -> str:
    lines = []
    for entry in entries:
        match entry:
            case NamespaceGroup():
                lines.append(f"[+] {entry.label}")
            case KeyRecord(raw_type=None):
                lines.append(f"    {entry.label}")
            case KeyRecord():
                lines.append(f"    {entry.label}  {entry.raw_type}  {entry.ttl_label}")
            case Placeholder():
                lines.append(entry.message)
    return "\n".join(lines)


def _expiry(ttl: int) -> str:
    if ttl > 0:
        return f"TTL: {ttl}s"
    if ttl == -1:
        return "No expiry"
    return "Expired"


@command("connect")
async def cmd_connect(console: Console, args: str):
    parts = tokenize(args)

    if len(parts) > 1:
        raise UsageError("Usage: .connect [name]")

    profile = console.settings.select_profile(parts[0] if parts else None)
    await console.session.connect(profile)
    return (
        f"Connected to Ferrite at {profile.address}\n"
        f"Server version: {console.session.server_version}"
    )


@command("disconnect")
async def cmd_disconnect(console: Console, args: str):
    if not console.session.is_connected:
        return "Not connected to Ferrite"

    await console.session.disconnect()
    return "Disconnected from Ferrite"


@command("keys")
async def cmd_keys(console: Console, args: str):
    return render_entries(await console.browser.list_root())


@command("refresh")
async def cmd_refresh(console: Console, args: str):
    return render_entries(await console.browser.refresh())


@command("expand")
async def cmd_expand(console: Console, args: str):
    parts = tokenize(args)

    if len(parts) != 1:
        raise UsageError("Usage: .expand <prefix>")

    return render_entries(await console.browser.expand(parts[0]))


@command("inspect")
async def cmd_inspect(console: Console, args: str):
    parts = tokenize(args)

    if len(parts) != 1:
        raise UsageError("Usage: .inspect <key>")

    value = await console.browser.inspect(parts[0])
    return json.dumps(value.to_dict(), indent=2, ensure_ascii=False, default=str)


@command("browse")
async def cmd_browse(console: Console, args: str):
    """
    Handle the '.browse' command.

    Expected syntax:
        .browse [pattern]

    Lists up to ``max_keys`` keys matching the pattern (default ``*``) with
    their type and expiry, one per line.
    """
    parts = tokenize(args)

    if len(parts) > 1:
        raise UsageError("Usage: .browse [pattern]")

    pattern = parts[0] if parts else "*"
    transport = console.session.transport
    scanner = KeyspaceScanner(transport, batch_size=console.settings.scan_batch_size)
    keys = await scanner.scan_keys(pattern, console.settings.max_keys)

    lines = [f"Found {len(keys)} keys"]
    for key in keys:
        key_type = await transport.type(key)
        ttl = await transport.ttl(key)
        lines.append(f"{key}  {key_type}  {_expiry(ttl)}")
    return "\n".join(lines)


@command("info")
async def cmd_info(console: Console, args: str):
    parts = tokenize(args)

    if len(parts) > 1:
        raise UsageError("Usage: .info [section]")

    if not parts:
        return "\n".join(f"{name:<12} {title}" for name, title in SECTIONS.items())

    section = parts[0].lower()
    info = await console.session.transport.info(section)
    entries = parse_info_section(info, section)
    return "\n".join(f"{entry.key}: {entry.value}" for entry in entries)


@command("format")
async def cmd_format(console: Console, args: str):
    parts = tokenize(args)

    if not parts:
        return f"Output format: {console.executor.output_format}"

    try:
        console.executor.output_format = OutputFormat(parts[0].lower())
    except ValueError:
        raise UsageError("Usage: .format [json|table|raw]")

    return f"Output format: {console.executor.output_format}"


@command("flushdb")
async def cmd_flushdb(console: Console, args: str):
    transport = console.session.transport
    answer = console.ask(
        "Are you sure you want to flush the current database? This cannot be undone. [yes/no] "
    )

    if answer.strip().lower() != "yes":
        return "Aborted"

    await transport.execute("FLUSHDB")
    return "Database flushed successfully"


@command("source")
async def cmd_source(console: Console, args: str):
    parts = tokenize(args)

    if len(parts) != 1:
        raise UsageError("Usage: .source <file>")

    try:
        text = Path(parts[0]).read_text(encoding="utf-8")
    except OSError as ex:
        raise UsageError(f"Cannot read '{parts[0]}': {ex}")

    blocks = []
    async for line, output, error in console.executor.execute_many(text):
        if error is not None:
            blocks.append(f"> {line}\nError executing '{line}': {error}")
        else:
            blocks.append(f"> {line}\n{output}")
    return "\n\n".join(blocks)


@command("help")
async def cmd_help(console: Console, args: str):
    parts = tokenize(args)

    if not parts:
        lines = ["Local commands:"]
        lines.extend(f"  {PREFIX}{name}" for name in COMMANDS)
        lines.append("Anything else is sent to the server, e.g. GET mykey")
        return "\n".join(lines)

    doc = lookup(parts[0])
    if doc is not None:
        return f"{doc.syntax}\n\n{doc.description}"

    candidates = complete(parts[0])
    if candidates:
        return "\n".join(candidates)

    return f"No help for '{parts[0]}'"
