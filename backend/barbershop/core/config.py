"""
Centralized configuration module for application-wide settings.

Settings are read from environment variables once at import time. When a
``.env`` file is present and ``DATABASE_URL`` is not already defined by the
environment, it is loaded first so local development matches deployment.
"""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

if not os.getenv("DATABASE_URL"):
    load_dotenv()

_TRUTHY = ("true", "1", "yes")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


# ===========================
# Storage Configuration
# ===========================

STORAGE_MEMORY = "memory"
STORAGE_SQL = "sql"


def get_storage_backend() -> str:
    """
    Get the storage backend used by ``create_store()``.

    Returns:
        str: ``"memory"`` or ``"sql"``

    Environment Variables:
        BARBERSHOP_STORAGE: Storage backend name
            Default: 'memory'
            Unknown values fall back to 'memory' with a warning.

    Examples:
        >>> # In .env file:
        >>> # BARBERSHOP_STORAGE=sql
        >>> get_storage_backend()
        'sql'
    """
    backend = os.getenv("BARBERSHOP_STORAGE", STORAGE_MEMORY).strip().lower()
    if backend not in (STORAGE_MEMORY, STORAGE_SQL):
        logger.warning(
            f"Unknown storage backend '{backend}' in BARBERSHOP_STORAGE. "
            f"Falling back to '{STORAGE_MEMORY}'."
        )
        return STORAGE_MEMORY
    return backend


STORAGE_BACKEND = get_storage_backend()


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL for the SQL backend.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL
            Default: 'sqlite:///./barbershop.db'
    """
    return os.getenv("DATABASE_URL", "sqlite:///./barbershop.db")


DATABASE_URL = get_database_url()


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    """Get the log level name from LOG_LEVEL (default 'INFO')."""
    return os.getenv("LOG_LEVEL", "INFO").strip().upper()


LOG_LEVEL = get_log_level()
LOG_JSON = _env_flag("LOG_JSON")
LOG_TO_FILE = _env_flag("LOG_TO_FILE")
SQL_ECHO = _env_flag("SQL_ECHO")


def log_storage_config():
    """
    Log the active storage configuration.

    Should be called during application startup to provide visibility
    into the backend in use (the database password is never logged).
    """
    logger.info(
        "Storage configuration initialized",
        extra={
            "context": {
                "storage_backend": STORAGE_BACKEND,
                "database_driver": DATABASE_URL.split(":", 1)[0],
            }
        },
    )
