from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "hr_payroll"

    @classmethod
    def from_settings(cls, db_config: dict) -> "DBConfig":
        """Build from a ``DB_CONFIG`` dict; absent keys keep the defaults."""
        defaults = cls()
        return cls(
            host=str(db_config.get("host", defaults.host)),
            port=int(db_config.get("port", defaults.port)),
            user=str(db_config.get("user", defaults.user)),
            password=str(db_config.get("password", defaults.password)),
            database=str(db_config.get("database", defaults.database)),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> Dict[str, Any]:
        kwargs = asdict(self)
        if not with_database:
            kwargs.pop("database")
        kwargs.update(charset="utf8mb4", use_pure=True)
        return kwargs


class DatabaseConnection:
    """Hands out a fresh connection per repository call.

    One factory per process; asking for a different ``DBConfig`` replaces it
    (the test settings point at their own database).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        current = cls._instance
        if current is None or current.config != config:
            cls._instance = current = cls(config)
        return current

    def connect(self):
        return mysql.connector.connect(**self.config.connect_kwargs())
