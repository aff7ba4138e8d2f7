# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

"""Thin wrapper around the ``ycqlsh`` command-line client."""

from __future__ import annotations

import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from packaging.version import InvalidVersion, Version

from knowlg_migrate.config import ConnectionSettings
from knowlg_migrate.errors import ClientNotFoundError, ClientVersionError, ConnectionCheckError

CONNECTION_PROBE = "DESCRIBE KEYSPACES;"

_VERSION_RE = re.compile(r"(\d+(?:\.\d+)+)")


def normalize_version(output: str) -> Optional[str]:
    """Pull the first dotted version number out of ``ycqlsh --version`` output."""
    match = _VERSION_RE.search(output or "")
    return match.group(1) if match else None


class YcqlshClient:
    def __init__(self, connection: ConnectionSettings, binary: str = "ycqlsh") -> None:
        self.connection = connection
        self.binary = binary

    def base_command(self) -> List[str]:
        conn = self.connection
        return [
            self.binary,
            conn.host,
            str(conn.port),
            "-u",
            conn.username,
            "-p",
            conn.password,
        ]

    def file_command(self, path: Path) -> List[str]:
        return self.base_command() + ["-f", str(path)]

    def statement_command(self, statement: str) -> List[str]:
        return self.base_command() + ["-e", statement]

    def locate(self) -> str:
        resolved = shutil.which(self.binary)
        if resolved is None:
            raise ClientNotFoundError(self.binary)
        return resolved

    def version(self) -> Optional[Version]:
        result = subprocess.run(
            [self.binary, "--version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
        raw = normalize_version(result.stdout)
        if raw is None:
            return None
        try:
            return Version(raw)
        except InvalidVersion:
            return None

    def check_version(self, minimum: str) -> Version:
        try:
            required = Version(minimum)
        except InvalidVersion:
            raise ClientVersionError(f"invalid minimum client version: {minimum!r}") from None
        installed = self.version()
        if installed is None:
            raise ClientVersionError(f"could not determine {self.binary} version")
        if installed < required:
            raise ClientVersionError(
                f"{self.binary} {installed} is older than required {required}"
            )
        return installed

    def _run_logged(self, cmd: List[str], log_path: Path) -> int:
        with log_path.open("a") as log:
            result = subprocess.run(cmd, stdout=log, stderr=subprocess.STDOUT)
        return result.returncode

    def check_connection(self, log_path: Path) -> None:
        returncode = self._run_logged(self.statement_command(CONNECTION_PROBE), log_path)
        if returncode != 0:
            raise ConnectionCheckError(self.connection.host, self.connection.port, returncode)

    def execute_file(self, path: Path, log_path: Path) -> int:
        return self._run_logged(self.file_command(path), log_path)
