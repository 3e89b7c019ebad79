from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import mysql.connector

from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config.get("password", "")),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """Connection factory for a configured MySQL database.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    available = True

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )


class UnavailableDatabase:
    """Store handle used when no database is configured.

    Repositories check `available` and return empty reads; any write
    reaches `connect()` and fails loudly.
    """

    available = False

    def connect(self):
        raise StoreUnavailableError("Database not available")


StoreHandle = Union[DatabaseConnection, UnavailableDatabase]


def open_store(db_config: Optional[dict]) -> StoreHandle:
    if not db_config:
        logger.warning("No DATABASE_URL configured; reads return empty results and writes fail")
        return UnavailableDatabase()
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_writable(repo) -> None:
    """Fail a mutation up front when its repository has no store behind it."""
    if not getattr(repo, "available", True):
        raise StoreUnavailableError("Database not available")
