"""
Test package.

Settings are read once at import time, so the test environment is set
here before anything under app/ is imported.
"""
import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_skillx.db")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
