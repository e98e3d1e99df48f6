"""
config.py
---------
Central configuration module. Loads the database connection settings
from the environment (or a local .env file) into an immutable object.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class DatabaseConfig:
    """
    PostgreSQL connection settings, fixed for the lifetime of the process.

    Attributes:
        user: Login role.
        host: Server host name.
        database: Target database holding the ``clientes`` table.
        password: Login password.
        port: Server port.
        dialect: Optional dialect hint. Never handed to the driver.
        admin_database: Always-present database used to create ``database``.
        pool_min: Connections the pool opens up front.
        pool_max: Upper bound on simultaneously checked-out connections.
    """
    user: str
    host: str
    database: str
    password: str = ""
    port: int = 5432
    dialect: Optional[str] = None
    admin_database: str = "postgres"
    pool_min: int = 1
    pool_max: int = 10

    def __post_init__(self) -> None:
        if self.pool_max < 1:
            raise ConfigError("DB_POOL_MAX must be at least 1")
        if self.pool_min < 0 or self.pool_min > self.pool_max:
            raise ConfigError(
                f"DB_POOL_MIN ({self.pool_min}) must be between 0 and DB_POOL_MAX ({self.pool_max})"
            )

    def connect_kwargs(self, database: Optional[str] = None) -> dict:
        """Keyword arguments for psycopg2, pointed at ``database`` or the target one."""
        return {
            "user": self.user,
            "host": self.host,
            "dbname": database or self.database,
            "password": self.password,
            "port": self.port,
        }


def load_config() -> DatabaseConfig:
    """Build a DatabaseConfig from the current environment."""
    return DatabaseConfig(
        user=os.getenv("USER_NAME", "postgres"),
        host=os.getenv("HOST_NAME", "localhost"),
        database=os.getenv("DB_NAME", "tests"),
        password=os.getenv("DB_PASSWORD", ""),
        port=_int_env("PORT_NUMBER", 5432),
        dialect=os.getenv("DB_DIALECT") or None,
        admin_database=os.getenv("ADMIN_DB_NAME", "postgres"),
        pool_min=_int_env("DB_POOL_MIN", 1),
        pool_max=_int_env("DB_POOL_MAX", 10),
    )
