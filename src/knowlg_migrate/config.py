# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

"""Connection parameters, file ordering and run settings."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from knowlg_migrate.errors import ConfigError

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_CLIENT = "ycqlsh"
ENV_TOKEN = "${ENV}"

# sunbird.cql creates the keyspaces the remaining files write into.
DEFAULT_CQL_FILES: Tuple[str, ...] = (
    "sunbird.cql",
    "lock_db.cql",
    "dialcodes.cql",
    "content_store.cql",
    "category_store.cql",
    "dialcode_store.cql",
    "hierarchy_store.cql",
    "platform_db.cql",
    "script_store.cql",
)

_ENVIRONMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def load_env(path: Path) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if not path.exists():
        raise ConfigError(f"env file not found: {path}")
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        env[key.strip()] = value.strip().strip("'\"")
    return env


@dataclass(frozen=True)
class ConnectionSettings:
    host: str = "localhost"
    port: int = 9042
    username: str = "yugabyte"
    password: str = "yugabyte"

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "ConnectionSettings":
        defaults = cls()
        raw_port = env.get("YCQLSH_PORT") or str(defaults.port)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"YCQLSH_PORT must be an integer, got {raw_port!r}") from None
        return cls(
            host=env.get("YCQLSH_HOST") or defaults.host,
            port=port,
            username=env.get("YCQLSH_USERNAME") or defaults.username,
            password=env.get("YCQLSH_PASSWORD") or defaults.password,
        )

    def override(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> "ConnectionSettings":
        return ConnectionSettings(
            host=host if host is not None else self.host,
            port=port if port is not None else self.port,
            username=username if username is not None else self.username,
            password=password if password is not None else self.password,
        )


@dataclass
class MigrationConfig:
    migrations_dir: Path
    environment: str = DEFAULT_ENVIRONMENT
    log_dir: Optional[Path] = None
    client: str = DEFAULT_CLIENT
    files: Tuple[str, ...] = DEFAULT_CQL_FILES
    connection: ConnectionSettings = field(default_factory=ConnectionSettings)
    min_client_version: Optional[str] = None

    def __post_init__(self) -> None:
        if not _ENVIRONMENT_RE.match(self.environment or ""):
            raise ConfigError(
                f"invalid environment {self.environment!r}: "
                "use letters, digits, '-' or '_'"
            )
        self.migrations_dir = Path(self.migrations_dir)
        if not self.migrations_dir.is_dir():
            raise ConfigError(f"migrations directory not found: {self.migrations_dir}")
        if self.log_dir is None:
            self.log_dir = self.migrations_dir
        self.log_dir = Path(self.log_dir)


def merged_environment(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Return ``env_file`` values overlaid with the process environment."""
    env: Dict[str, str] = {}
    if env_file is not None:
        env.update(load_env(env_file))
    env.update(os.environ)
    return env
