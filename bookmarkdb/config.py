import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "default-secret-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", f"sqlite:///{BASE_DIR / 'bookmarks.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # No authentication yet: every API request acts as this user.
    DEFAULT_USERNAME = os.environ.get("DEFAULT_USERNAME", "default")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    DEFAULT_USERNAME = "tester"
