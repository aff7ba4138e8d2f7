"""Apply the ordered sunbird-knowlg CQL files to a YugabyteDB cluster.

The heavy lifting is done by the ``ycqlsh`` client; this package only
prepares each file for the target environment, runs it, and keeps score.
"""

from knowlg_migrate.config import ConnectionSettings, DEFAULT_CQL_FILES, MigrationConfig
from knowlg_migrate.errors import MigrationError
from knowlg_migrate.runner import MigrationResult, MigrationRunner

__version__ = "0.1.0"

__all__: list[str] = [
    "ConnectionSettings",
    "DEFAULT_CQL_FILES",
    "MigrationConfig",
    "MigrationError",
    "MigrationResult",
    "MigrationRunner",
]
