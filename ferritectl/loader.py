import os
from pathlib import Path

from ferritectl.exception import ConfigError

CONFIG_ENV = "FERRITECTL_CONFIG"
DEFAULT_CONFIG_NAME = "ferritectl.yaml"


def get_configfile(explicit: str | None = None) -> Path | None:
    # Priority: CLI > ENV > default file in current working directory
    raw = explicit or os.getenv(CONFIG_ENV)

    if raw is None:
        file = Path.cwd() / DEFAULT_CONFIG_NAME
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise ConfigError(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV} environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIG_NAME}' file in the current working directory."
        )

    return file
