# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

"""Run the sunbird-knowlg CQL files against YugabyteDB with ycqlsh.

ENVIRONMENT is substituted for every ${ENV} token in the CQL files
(e.g. dev, sb, prod). Connection parameters default to the YCQLSH_HOST,
YCQLSH_PORT, YCQLSH_USERNAME and YCQLSH_PASSWORD environment variables.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from knowlg_migrate.config import (
    DEFAULT_CLIENT,
    DEFAULT_ENVIRONMENT,
    ConnectionSettings,
    MigrationConfig,
    merged_environment,
)
from knowlg_migrate.errors import ConnectionCheckError, MigrationError
from knowlg_migrate.logs import configure_logging, echo, header, log_file_name, shutdown_logging
from knowlg_migrate.runner import MigrationRunner

EXAMPLES = """examples:
  knowlg-migrate           # Uses 'dev' as environment
  knowlg-migrate sb        # Uses 'sb' as environment
  knowlg-migrate prod --migrations-dir ./sunbird-knowlg
"""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="knowlg-migrate",
        description=__doc__,
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "environment",
        nargs="?",
        default=DEFAULT_ENVIRONMENT,
        help=f"Environment prefix for CQL files (default: {DEFAULT_ENVIRONMENT})",
    )
    parser.add_argument(
        "--migrations-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory holding the CQL files (default: current directory)",
    )
    parser.add_argument("--log-dir", type=Path, help="Where to write the run log (default: migrations dir)")
    parser.add_argument("--env-file", type=Path, help="Read YCQLSH_* settings from an env-style file")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    parser.add_argument("--username")
    parser.add_argument("--password")
    parser.add_argument("--client", help=f"Client executable (default: $YCQLSH_BIN or {DEFAULT_CLIENT})")
    parser.add_argument("--min-client-version", help="Refuse to run with an older client")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> MigrationConfig:
    env = merged_environment(args.env_file)
    connection = ConnectionSettings.from_env(env).override(
        host=args.host,
        port=args.port,
        username=args.username,
        password=args.password,
    )
    return MigrationConfig(
        migrations_dir=args.migrations_dir.resolve(),
        environment=args.environment,
        log_dir=args.log_dir,
        client=args.client or env.get("YCQLSH_BIN") or DEFAULT_CLIENT,
        connection=connection,
        min_client_version=args.min_client_version,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except MigrationError as exc:
        print(f"[knowlg-migrate] {exc}", file=sys.stderr)
        return 1

    log_file = config.log_dir / log_file_name()
    color = not args.no_color and sys.stdout.isatty() and "NO_COLOR" not in os.environ
    logger = configure_logging(log_file, color=color)
    try:
        header(logger, "YugabyteDB CQL Migration Script - sunbird-knowlg")
        logger.info("Configuration:", extra={"tone": "info"})
        echo(logger, f"  Environment: {config.environment}")
        echo(logger, f"  Host: {config.connection.host}")
        echo(logger, f"  Port: {config.connection.port}")
        echo(logger, f"  Username: {config.connection.username}")
        echo(logger, f"  Migrations Directory: {config.migrations_dir}")
        echo(logger, f"  Log File: {log_file}")
        echo(logger)

        runner = MigrationRunner(config, log_file, logger=logger)
        try:
            result = runner.run()
        except ConnectionCheckError as exc:
            logger.error("✗ %s", exc)
            return 1
        except MigrationError as exc:
            logger.error("ERROR: %s", exc)
            return 1
        return 0 if result.ok else 1
    finally:
        shutdown_logging()
