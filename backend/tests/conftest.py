"""Root conftest: shared test configuration."""

import os

# Imported modules read settings at import time; never point them at a real server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
