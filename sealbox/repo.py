"""Secret records and their SQLite-backed storage."""

from __future__ import annotations

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from dataclasses import astuple, dataclass, fields

from sealbox.errors import DatabaseError

log = logging.getLogger(__name__)

_BUSY_TIMEOUT_SECONDS = 0.5

_SCHEMA = """
CREATE TABLE IF NOT EXISTS secrets (
    namespace TEXT NOT NULL,
    key TEXT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    encrypted_data BLOB NOT NULL,
    encrypted_data_key BLOB NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL,
    expires_at INTEGER,
    metadata TEXT,
    access_count INTEGER DEFAULT 0,
    PRIMARY KEY (namespace, key, version)
)
"""


@dataclass
class Secret:
    """One stored version of a secret."""

    namespace: str
    key: str
    version: int
    encrypted_data: bytes
    encrypted_data_key: bytes
    created_at: int
    updated_at: int
    expires_at: int | None = None
    metadata: str | None = None
    access_count: int = 0

    @classmethod
    def create(cls, key: str) -> Secret:
        """Return a fresh first version of the secret named ``key``."""
        return cls(
            namespace="",
            key=key,
            version=1,
            encrypted_data=b"",
            encrypted_data_key=b"",
            created_at=0,
            updated_at=0,
        )


_COLUMNS = ", ".join(f.name for f in fields(Secret))
_PLACEHOLDERS = ", ".join("?" for _ in fields(Secret))


class SecretRepo(ABC):
    """Storage for secrets."""

    @abstractmethod
    def get_secret(self, key: str) -> Secret | None:
        """Return the latest version of ``key``, or None."""

    @abstractmethod
    def save_secret(self, secret: Secret) -> None:
        """Store ``secret``, replacing an identical version."""

    @abstractmethod
    def delete_secret(self, key: str) -> None:
        """Remove every version of ``key``."""


class SqliteSecretRepo(SecretRepo):
    """Secret storage in a SQLite database file."""

    def __init__(self, db_path: str) -> None:
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(
                db_path, timeout=_BUSY_TIMEOUT_SECONDS, check_same_thread=False
            )
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute(
                f"PRAGMA busy_timeout = {int(_BUSY_TIMEOUT_SECONDS * 1000)}"
            )
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as exc:
            raise DatabaseError(exc) from exc

    def get_secret(self, key: str) -> Secret | None:
        log.info("get_secret")
        try:
            with self._lock:
                row = self._conn.execute(
                    f"SELECT {_COLUMNS} FROM secrets WHERE key = ? "
                    "ORDER BY version DESC, namespace LIMIT 1",
                    (key,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(exc) from exc
        if row is None:
            return None
        secret = Secret(*row)
        secret.encrypted_data = bytes(secret.encrypted_data)
        secret.encrypted_data_key = bytes(secret.encrypted_data_key)
        if secret.access_count is None:
            secret.access_count = 0
        return secret

    def save_secret(self, secret: Secret) -> None:
        log.info("save_secret")
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    f"INSERT OR REPLACE INTO secrets ({_COLUMNS}) VALUES ({_PLACEHOLDERS})",
                    astuple(secret),
                )
        except sqlite3.Error as exc:
            raise DatabaseError(exc) from exc

    def delete_secret(self, key: str) -> None:
        log.info("delete_secret")
        try:
            with self._lock, self._conn:
                self._conn.execute("DELETE FROM secrets WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise DatabaseError(exc) from exc

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> SqliteSecretRepo:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()