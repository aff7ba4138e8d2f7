# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

"""Exceptions raised before any CQL file is executed."""

from __future__ import annotations


class MigrationError(Exception):
    """Base class for errors that abort a migration run."""


class ConfigError(MigrationError):
    pass


class ClientNotFoundError(MigrationError):
    def __init__(self, client: str) -> None:
        super().__init__(
            f"{client} command not found. Please ensure YugabyteDB client is installed."
        )
        self.client = client


class ClientVersionError(MigrationError):
    pass


class ConnectionCheckError(MigrationError):
    def __init__(self, host: str, port: int, returncode: int) -> None:
        super().__init__("Connection failed. Please check your connection parameters.")
        self.host = host
        self.port = port
        self.returncode = returncode
