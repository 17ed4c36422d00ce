"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.

Two values can be overridden from the environment:
- ``SQLTABLE_DB_PATH``: database file used when no path is given.
- ``SQLTABLE_BUSY_TIMEOUT_MS``: SQLite busy timeout for new connections.
"""

import os
from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/sqltable/global_config.py, go up two levels: src/sqltable -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "sqltable"

# Database directories
DB_DIR: Path = PROJECT_ROOT / "db"
DEFAULT_DB_PATH: Path = Path(
    os.environ.get("SQLTABLE_DB_PATH", DB_DIR / f"{PROJECT_NAME}-dev.sqlite")
)

# Connection settings
BUSY_TIMEOUT_MS: int = int(os.environ.get("SQLTABLE_BUSY_TIMEOUT_MS", "5000"))
