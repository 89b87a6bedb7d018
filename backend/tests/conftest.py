"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database or leak dev secrets into assertions
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")
