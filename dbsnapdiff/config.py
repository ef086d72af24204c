from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from sqlalchemy.engine import URL

ENV_HOST = "DB_HOST"
ENV_USERNAME = "DB_USERNAME"
ENV_PASSWORD = "DB_PASSWORD"
ENV_DATABASE = "DB_DATABASE"
ENV_PORT = "DB_PORT"
ENV_ENCODING = "DB_ENCODING"
ENV_OUTPUT_DIR = "DB_DIFF_OUTPUT_DIR"

DEFAULT_OUTPUT_DIR = Path("/tmp")

# field name -> environment variable overriding it
_ENV_OVERRIDES = {
    "host": ENV_HOST,
    "username": ENV_USERNAME,
    "password": ENV_PASSWORD,
    "database": ENV_DATABASE,
    "port": ENV_PORT,
    "encoding": ENV_ENCODING,
}


@dataclass(frozen=True)
class ConnectionConfig:
    database: str
    host: str = "127.0.0.1"
    port: int = 3306
    username: str = "root"
    password: str = ""
    encoding: str = "utf8mb4"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.database:
            raise ValueError("database must be a non-empty string")
        try:
            port = int(self.port)
        except (TypeError, ValueError):
            raise ValueError(f"port must be an integer, got {self.port!r}") from None
        # environment values arrive as strings
        object.__setattr__(self, "port", port)

    def url(self) -> URL:
        """SQLAlchemy URL for the PyMySQL driver."""
        return URL.create(
            "mysql+pymysql",
            username=self.username,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database,
            query={"charset": self.encoding} if self.encoding else {},
        )


def resolve_connection_config(
    defaults: ConnectionConfig | Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> ConnectionConfig:
    """
    Merge environment overrides on top of caller-supplied defaults.

    Each of DB_HOST, DB_USERNAME, DB_PASSWORD, DB_DATABASE, DB_PORT and
    DB_ENCODING overrides its field independently when set. Call once at
    startup; adapters only ever see the resolved config.

    Args:
        defaults: ConnectionConfig or a mapping of its field names
        environ: Environment snapshot (defaults to os.environ)

    Returns:
        A new, immutable ConnectionConfig
    """
    env = os.environ if environ is None else environ
    if isinstance(defaults, ConnectionConfig):
        values: dict[str, Any] = {
            name: getattr(defaults, name) for name in _ENV_OVERRIDES
        }
    else:
        values = {name: defaults[name] for name in _ENV_OVERRIDES if name in defaults}

    for name, var in _ENV_OVERRIDES.items():
        if var in env:
            values[name] = env[var]

    if isinstance(defaults, ConnectionConfig):
        return replace(defaults, **values)
    return ConnectionConfig(**values)


@dataclass(frozen=True)
class OutputConfig:
    output_dir: Path = DEFAULT_OUTPUT_DIR
    copy_to_clipboard: bool = True


def resolve_output_config(
    output_dir: Optional[str | Path] = None,
    copy_to_clipboard: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> OutputConfig:
    """Pick the report directory: explicit value, then DB_DIFF_OUTPUT_DIR, then /tmp."""
    env = os.environ if environ is None else environ
    if output_dir is None:
        output_dir = env.get(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR
    return OutputConfig(output_dir=Path(output_dir), copy_to_clipboard=copy_to_clipboard)
