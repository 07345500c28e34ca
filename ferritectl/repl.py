from ferritectl.commands import COMMANDS, PREFIX
from ferritectl.completion import install_completion
from ferritectl.console import Console
from ferritectl.exception import CommandError, ConnectError, FerriteError, TransportError
from ferritectl.settings import ConnectionProfile


async def handle_line(console: Console, line: str) -> str | None:
    """Dispatch one REPL line: local dot-commands first, server commands otherwise."""
    if line.startswith(PREFIX):
        parts = line[len(PREFIX):].split(maxsplit=1)
        op = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        if op not in COMMANDS:
            names = "\n".join(f"  {PREFIX}{name}" for name in COMMANDS)
            return f"Unknown command. Available:\n{names}"

        return await COMMANDS[op](console, args)

    try:
        return await console.executor.execute(line)
    except CommandError as exc:
        return f"Error executing '{line}': {exc}"


async def repl(console: Console, profile: ConnectionProfile | None = None) -> None:
    install_completion()

    if profile is None and console.settings.auto_connect:
        profile = console.settings.select_profile()

    if profile is not None:
        try:
            await console.session.connect(profile)
            print(f"Connected to Ferrite at {console.session.profile.address}")
        except FerriteError as exc:
            print("Error:", exc)

    while True:
        try:
            line = console.ask(console.prompt).strip()
        except EOFError:
            break

        if not line:
            continue

        if line in ("quit", "exit"):
            break

        try:
            res = await handle_line(console, line)
            if res is not None:
                print(res)
        except ConnectError as exc:
            print("Error:", exc)
        except TransportError as exc:
            # the command is not re-sent: the server may already have applied it
            profile = console.session.profile
            print(f"Connection lost: {exc}")
            if profile is not None:
                print("Reconnecting...")
                try:
                    await console.session.connect(profile)
                except FerriteError as reconnect_exc:
                    print("Error:", reconnect_exc)
        except FerriteError as exc:
            print("Error:", exc)

    await console.session.disconnect()
