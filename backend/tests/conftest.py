"""Shared test setup — point the app at an in-memory database before it is imported."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
