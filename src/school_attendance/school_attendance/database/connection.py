from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "absensi_db")),
        )


class DatabaseConnection:
    """Connection factory shared by every MySQL repository.

    Note: Connections are short-lived, one per repository call, unless the
    call runs inside ``transaction()``; then every cursor joins that one
    connection and the outermost block commits or rolls back.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group several repository calls into one commit."""

        if getattr(self._local, "conn", None) is not None:
            yield
            return

        conn = self.connect()
        self._local.conn = conn
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()

    @contextmanager
    def cursor(self, *, dictionary: bool = True) -> Iterator[Any]:
        """Cursor inside a transaction: commit on success, rollback on error."""

        joined = getattr(self._local, "conn", None)
        if joined is not None:
            cur = joined.cursor(dictionary=dictionary)
            try:
                yield cur
            finally:
                cur.close()
            return

        conn = self.connect()
        try:
            cur = conn.cursor(dictionary=dictionary)
            try:
                yield cur
                conn.commit()
            finally:
                cur.close()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
