from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping

import mysql.connector

CONNECT_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class DBConfig:
    """Where the sheet tables live. Built from the settings' DB_CONFIG dict."""

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "timecard_db"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(data.get("host") or defaults.host),
            port=int(data.get("port") or defaults.port),
            user=str(data.get("user") or defaults.user),
            password=str(data.get("password") or ""),
            database=str(data.get("database") or defaults.database),
        )


class DatabaseConnection:
    """Opens MySQL connections for the sheet store, one factory per target database.

    Every sheet primitive opens and closes its own connection, so there is no
    pool to share between requests.
    """

    _instances: ClassVar[Dict[DBConfig, "DatabaseConnection"]] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = cls(config)
        return cls._instances[config]

    def connect(self, *, with_database: bool = True):
        kwargs: Dict[str, Any] = dict(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            charset="utf8mb4",
            connection_timeout=CONNECT_TIMEOUT_SECONDS,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
