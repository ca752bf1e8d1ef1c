"""
Application configuration.

Values are read from the environment (a local .env file is loaded first)
and applied to the Flask app with `app.config.from_object(Config)`.
"""

import os
from dotenv import load_dotenv

# Load .env variables from the project root
load_dotenv()


def env_flag(name: str, default: bool) -> bool:
    """
    Read a boolean environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    Anything else falls back to the default.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default


class Config:
    # --- DATABASE ---
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = int(os.getenv("DB_PORT", 5432))
    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_NAME = os.getenv("DB_NAME")
    # Encrypted connection, server certificate verified (never blindly trusted)
    DB_SSLMODE = os.getenv("DB_SSLMODE", "verify-full")
    DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", 10))
    DB_POOL_MIN = int(os.getenv("DB_POOL_MIN", 1))
    DB_POOL_MAX = int(os.getenv("DB_POOL_MAX", 10))
    DB_CONNECT_ON_STARTUP = True

    # --- HTTP ---
    PORT = int(os.getenv("PORT", 5000))
    API_PREFIX = os.getenv("API_PREFIX", "/api")

    # --- RUNTIME ---
    APP_ENV = os.getenv("APP_ENV", "development")
    EXPOSE_ERROR_DETAILS = env_flag("EXPOSE_ERROR_DETAILS", APP_ENV == "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
