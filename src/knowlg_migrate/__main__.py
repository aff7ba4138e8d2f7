# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

import sys

from knowlg_migrate.cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via subprocess
    sys.exit(main(sys.argv[1:]))
