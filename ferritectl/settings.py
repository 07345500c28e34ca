from pathlib import Path
from typing import Annotated, Self

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ferritectl.exception import ConfigError
from ferritectl.formatter import OutputFormat


class ConnectionProfile(BaseModel):
    name: Annotated[
        str | None,
        Field(
            description="Display name of the connection. Defaults to '<host>:<port>'.",
            default=None
        )
    ]

    host: Annotated[
        str,
        Field(description="Host name or IP address of the Ferrite server.", default="localhost")
    ]

    port: Annotated[
        int,
        Field(description="TCP port of the Ferrite server.", default=6379, ge=1, le=65535)
    ]

    password: Annotated[
        str | None,
        Field(description="Password sent with AUTH on connect. Leave empty for none.", default=None)
    ]

    database: Annotated[
        int,
        Field(description="Logical database selected after connecting.", default=0, ge=0)
    ]

    connect_timeout: Annotated[
        float,
        Field(description="Seconds to wait for the TCP connection to be established.", default=5.0)
    ]

    @field_validator("password", mode="before")
    @classmethod
    def empty_password(cls, v):
        # an empty prompt answer means no password
        if v == "":
            return None
        return v

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def display_name(self) -> str:
        return self.name or self.address


class FerriteSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FERRITE_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    connections: Annotated[
        list[ConnectionProfile],
        Field(
            description=(
                "Saved connection profiles.\n"
                "With a single profile it is used directly; with several, one is\n"
                "picked by name (--connection). With none, the default profile\n"
                "localhost:6379 is used."
            ),
            default_factory=list
        )
    ]

    output_format: Annotated[
        OutputFormat,
        Field(description="How command replies are rendered: json, table or raw.", default=OutputFormat.JSON)
    ]

    max_keys: Annotated[
        int,
        Field(description="Upper bound on keys listed by a pattern search.", default=1000, ge=1)
    ]

    auto_connect: Annotated[
        bool,
        Field(description="Connect as soon as the REPL starts.", default=False)
    ]

    scan_batch_size: Annotated[
        int,
        Field(description="COUNT hint sent with every SCAN request.", default=100, ge=1)
    ]

    root_limit: Annotated[
        int,
        Field(description="Maximum number of keys scanned for the root listing.", default=500, ge=1)
    ]

    namespace_limit: Annotated[
        int,
        Field(description="Maximum number of keys scanned when expanding a namespace.", default=200, ge=1)
    ]

    log_level: Annotated[
        str,
        Field(description="Logging verbosity: DEBUG, INFO, WARNING, ERROR or CRITICAL.", default="WARNING")
    ]

    @field_validator("log_level")
    @classmethod
    def parse_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        data = {}
        if path is not None:
            try:
                with path.open("r") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as ex:
                raise ConfigError(f"[config] Invalid YAML in '{path}': {ex}") from ex
            except OSError as ex:
                raise ConfigError(f"[config] Cannot read '{path}': {ex}") from ex

            if not isinstance(data, dict):
                raise ConfigError(f"[config] '{path}' must contain a mapping")

        try:
            return cls(**data)
        except ValidationError as ex:
            raise ConfigError(f"[config] Invalid configuration: {ex}") from ex

    def select_profile(self, name: str | None = None) -> ConnectionProfile:
        if name is not None:
            for profile in self.connections:
                if name in (profile.name, profile.address):
                    return profile
            raise ConfigError(f"Unknown connection '{name}'")

        if self.connections:
            return self.connections[0]

        return ConnectionProfile()
