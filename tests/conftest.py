"""Test configuration shared by every suite.

Settings are read at import time, so the environment is prepared here,
before any ``app`` module is imported.
"""

import os

os.environ.setdefault("API_TOKEN", "test-token")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
