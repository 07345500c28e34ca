import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from ferritectl.console import Console
from ferritectl.exception import ConfigError, FerriteError
from ferritectl.formatter import OutputFormat
from ferritectl.lint import Severity, lint_file
from ferritectl.loader import get_configfile
from ferritectl.log import setup_logging
from ferritectl.repl import handle_line, repl
from ferritectl.settings import ConnectionProfile, FerriteSettings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ferritectl",
        description="Interactive client for Ferrite servers",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("address", nargs="?", help="host:port")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    parser.add_argument("--password", help="Password sent with AUTH on connect")
    parser.add_argument("--db", type=int, help="Logical database to select")

    parser.add_argument(
        "--connection",
        help="Name of a connection profile from the configuration file"
    )

    parser.add_argument(
        "-c", "--config",
        help=(
            "Path to a ferritectl configuration file (YAML).\n"
            "Defaults to $FERRITECTL_CONFIG, then ./ferritectl.yaml if present."
        )
    )

    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        help="Output format for command replies"
    )

    parser.add_argument(
        "-l", "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)"
    )

    parser.add_argument(
        "-e", "--execute",
        metavar="LINE",
        help=(
            "Run a single line and exit.\n"
            "Example:\n"
            "  ferritectl localhost:6379 -e 'SET greeting \"hello world\"'"
        )
    )

    parser.add_argument(
        "--check-config",
        metavar="FILE",
        help="Lint a ferrite.toml file and exit (status 1 on errors)"
    )

    return parser.parse_args(argv)


def resolve_profile(args: argparse.Namespace, settings: FerriteSettings) -> ConnectionProfile | None:
    # Priority: explicit flags > address argument > named profile
    if args.host is not None or args.port is not None:
        endpoint = {"host": args.host, "port": args.port}
        try:
            profile = ConnectionProfile(**{k: v for k, v in endpoint.items() if v is not None})
        except ValidationError as ex:
            raise ConfigError(f"Invalid --host/--port: {ex}") from ex
    elif args.address:
        host, _, port = args.address.rpartition(":")
        if not host or not port.isdigit():
            raise ConfigError(f"address must be host:port, got '{args.address}'")
        try:
            profile = ConnectionProfile(host=host, port=int(port))
        except ValidationError as ex:
            raise ConfigError(f"Invalid address '{args.address}': {ex}") from ex
    elif args.connection:
        profile = settings.select_profile(args.connection)
    else:
        return None

    overrides = {}
    if args.password is not None:
        overrides["password"] = args.password
    if args.db is not None:
        overrides["database"] = args.db
    return profile.model_copy(update=overrides)


def check_config(path: str) -> int:
    try:
        diagnostics = lint_file(Path(path))
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}")
        return 1

    for diagnostic in diagnostics:
        print(f"{path}:{diagnostic}")

    if not diagnostics:
        print("Configuration is valid")

    return 1 if any(d.severity is Severity.ERROR for d in diagnostics) else 0


async def run(args: argparse.Namespace, settings: FerriteSettings) -> int:
    console = Console.create(settings)
    profile = resolve_profile(args, settings)

    if args.execute is None:
        await repl(console, profile)
        return 0

    try:
        await console.session.connect(profile or settings.select_profile())
        res = await handle_line(console, args.execute)
        if res is not None:
            print(res)
    except FerriteError as exc:
        print("Error:", exc)
        return 1
    finally:
        await console.session.disconnect()

    return 0


def entrypoint():
    args = parse_args()

    if args.check_config:
        sys.exit(check_config(args.check_config))

    try:
        settings = FerriteSettings.load(get_configfile(args.config))
    except ConfigError as exc:
        print(exc)
        sys.exit(1)

    if args.format:
        settings.output_format = OutputFormat(args.format)

    setup_logging(args.log_level or settings.log_level)

    try:
        sys.exit(asyncio.run(run(args, settings)))
    except ConfigError as exc:
        print("Error:", exc)
        sys.exit(1)
