# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

"""Sequential execution of the CQL file list."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from knowlg_migrate.client import YcqlshClient
from knowlg_migrate.config import ENV_TOKEN, MigrationConfig
from knowlg_migrate.logs import LOGGER_NAME, RULE, echo, header


@dataclass
class MigrationResult:
    log_file: Path
    total: int = 0
    successful: int = 0
    failed: int = 0
    failed_files: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def record(self, name: str, returncode: Optional[int]) -> None:
        """Count ``name``; ``None`` means the client never ran."""
        if returncode == 0:
            self.successful += 1
        else:
            self.failed += 1
            self.failed_files.append(name)


def substitute_environment(data: bytes, environment: str) -> bytes:
    return data.replace(ENV_TOKEN.encode(), environment.encode())


@contextmanager
def prepared_file(source: Path, environment: str) -> Iterator[Path]:
    """Yield a ``.tmp_`` copy of ``source`` with the environment token filled in.

    The copy is made byte for byte, so encodings and line endings survive.
    """
    temp = source.with_name(f".tmp_{source.name}")
    temp.write_bytes(substitute_environment(source.read_bytes(), environment))
    try:
        yield temp
    finally:
        temp.unlink(missing_ok=True)


class MigrationRunner:
    def __init__(
        self,
        config: MigrationConfig,
        log_file: Path,
        client: Optional[YcqlshClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.log_file = log_file
        self.client = client or YcqlshClient(config.connection, binary=config.client)
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def preflight(self) -> None:
        self.client.locate()
        if self.config.min_client_version:
            installed = self.client.check_version(self.config.min_client_version)
            self.logger.info("%s version: %s", self.config.client, installed)
        self.logger.info("Testing connection to YugabyteDB...", extra={"tone": "progress"})
        self.client.check_connection(self.log_file)
        self.logger.info("✓ Connection successful", extra={"tone": "success"})
        echo(self.logger)

    def execute_file(self, source: Path, result: MigrationResult) -> None:
        name = source.name
        self.logger.info("Processing: %s", name, extra={"tone": "progress"})
        try:
            with prepared_file(source, self.config.environment) as temp:
                returncode = self.client.execute_file(temp, self.log_file)
        except OSError as exc:
            result.record(name, None)
            self.logger.error("✗ FAILED: %s could not be executed (%s)", name, exc)
            echo(self.logger)
            return
        result.record(name, returncode)
        if returncode == 0:
            self.logger.info("✓ SUCCESS: %s executed successfully", name, extra={"tone": "success"})
        else:
            self.logger.error("✗ FAILED: %s execution failed (exit code: %d)", name, returncode)
        echo(self.logger)

    def execute_all(self) -> MigrationResult:
        result = MigrationResult(log_file=self.log_file)
        header(self.logger, "Starting CQL File Execution")
        for name in self.config.files:
            source = self.config.migrations_dir / name
            if not source.is_file():
                self.logger.warning("WARNING: %s not found, skipping...", name)
                echo(self.logger)
                continue
            result.total += 1
            self.execute_file(source, result)
        return result

    def report(self, result: MigrationResult) -> None:
        header(self.logger, "Migration Summary")
        echo(self.logger, f"Total Files Processed: {result.total}")
        echo(self.logger, f"Successful: {result.successful}")
        echo(self.logger, f"Failed: {result.failed}")
        echo(self.logger)
        if not result.ok:
            self.logger.error("Failed Files:")
            for name in result.failed_files:
                echo(self.logger, f"  - {name}")
            echo(self.logger)
            self.logger.error(
                "Migration completed with errors. Check log file: %s", result.log_file
            )
            return
        self.logger.info("All migrations completed successfully!", extra={"tone": "success"})
        self.logger.info("Log file: %s", result.log_file, extra={"tone": "info"})
        echo(self.logger)
        self.logger.info(RULE, extra={"tone": "info"})

    def run(self) -> MigrationResult:
        self.preflight()
        result = self.execute_all()
        self.report(result)
        return result
