# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

import os
import stat
from pathlib import Path

import pytest

# Stand-in for ycqlsh: records each invocation, keeps a copy of every -f
# file it was handed, and fails any file whose body mentions FAIL_ME.
FAKE_YCQLSH = r"""#!/usr/bin/env bash
echo "$*" >> "$FAKE_YCQLSH_CALLS"
if [ "$1" = "--version" ]; then
    echo "ycqlsh ${FAKE_YCQLSH_VERSION:-5.0.1}"
    exit 0
fi
while [ $# -gt 0 ]; do
    case "$1" in
        -e)
            echo "system_auth  system_schema  sunbird"
            exit "${FAKE_YCQLSH_CONNECT_EXIT:-0}"
            ;;
        -f)
            cp "$2" "$FAKE_YCQLSH_SEEN/$(basename "$2")"
            if grep -q FAIL_ME "$2"; then
                echo "SyntaxException: line 1 no viable alternative" >&2
                exit 2
            fi
            echo "ran $(basename "$2")"
            exit 0
            ;;
    esac
    shift
done
exit 64
"""


class FakeYcqlsh:
    def __init__(self, root: Path) -> None:
        self.bin_dir = root / "bin"
        self.calls_file = root / "calls.txt"
        self.seen_dir = root / "seen"
        self.bin_dir.mkdir(parents=True)
        self.seen_dir.mkdir()
        self.calls_file.touch()
        script = self.bin_dir / "ycqlsh"
        script.write_text(FAKE_YCQLSH)
        script.chmod(stat.S_IRWXU)

    @property
    def calls(self):
        return [line for line in self.calls_file.read_text().splitlines() if line]

    def seen(self, name):
        return (self.seen_dir / name).read_text()

    def seen_bytes(self, name):
        return (self.seen_dir / name).read_bytes()


@pytest.fixture
def fake_ycqlsh(tmp_path, monkeypatch):
    fake = FakeYcqlsh(tmp_path / "fake")
    monkeypatch.setenv("PATH", f"{fake.bin_dir}:{os.environ['PATH']}")
    monkeypatch.setenv("FAKE_YCQLSH_CALLS", str(fake.calls_file))
    monkeypatch.setenv("FAKE_YCQLSH_SEEN", str(fake.seen_dir))
    for key in ("YCQLSH_HOST", "YCQLSH_PORT", "YCQLSH_USERNAME", "YCQLSH_PASSWORD", "YCQLSH_BIN"):
        monkeypatch.delenv(key, raising=False)
    return fake


@pytest.fixture
def migrations_dir(tmp_path):
    path = tmp_path / "sunbird-knowlg"
    path.mkdir()
    (path / "sunbird.cql").write_text(
        "CREATE KEYSPACE IF NOT EXISTS ${ENV}_sunbird WITH replication = "
        "{'class': 'SimpleStrategy', 'replication_factor': 1};\n"
    )
    (path / "lock_db.cql").write_text(
        "CREATE TABLE IF NOT EXISTS ${ENV}_lock_db.lock (resourceid text PRIMARY KEY);\n"
    )
    (path / "content_store.cql").write_text(
        "CREATE TABLE IF NOT EXISTS ${ENV}_content_store.content_data (content_id text PRIMARY KEY);\n"
    )
    return path
