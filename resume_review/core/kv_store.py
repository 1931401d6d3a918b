from __future__ import annotations

import json
import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SQLiteKeyValueStore:
    """Durable JSON documents addressed by a namespace key.

    Each ``put`` overwrites the whole document stored under the key.
    """

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._conn_lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._conn_lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self._db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    namespace_key TEXT PRIMARY KEY,
                    value_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            self._conn = conn
            return conn

    def get(self, key: str) -> Any | None:
        conn = self._get_connection()
        with self._conn_lock:
            cur = conn.execute(
                "SELECT value_json FROM kv_store WHERE namespace_key = ?",
                (key,),
            )
            row = cur.fetchone()
        if not row:
            return None
        return json.loads(row[0])

    def put(self, key: str, value: Any) -> None:
        conn = self._get_connection()
        payload_json = json.dumps(value, ensure_ascii=False)
        with self._conn_lock:
            conn.execute(
                """
                INSERT INTO kv_store (namespace_key, value_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(namespace_key) DO UPDATE SET
                    value_json = excluded.value_json,
                    updated_at = excluded.updated_at
                """,
                (key, payload_json, _utc_now().isoformat()),
            )

    def close(self) -> None:
        with self._conn_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
