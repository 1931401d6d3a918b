from __future__ import annotations

import logging
import sqlite3

from pydantic import TypeAdapter, ValidationError

from resume_review.core.errors import HistoryWriteError
from resume_review.core.kv_store import SQLiteKeyValueStore
from resume_review.schemas.analysis import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "resume_analysis_history"
HISTORY_LIMIT = 10

_entries_adapter = TypeAdapter(list[HistoryEntry])


class HistoryLog:
    """Most-recent-first log of past analyses, capped at ``HISTORY_LIMIT`` entries.

    Memory only changes after the store accepted the write.
    """

    def __init__(
        self,
        store: SQLiteKeyValueStore,
        *,
        key: str = HISTORY_STORAGE_KEY,
        limit: int = HISTORY_LIMIT,
    ):
        self._store = store
        self._key = key
        self._limit = limit
        self._entries: list[HistoryEntry] = []

    def load(self) -> None:
        try:
            raw = self._store.get(self._key)
            entries = _entries_adapter.validate_python(raw) if raw is not None else []
        except (ValueError, ValidationError, sqlite3.Error, OSError) as exc:
            logger.warning("history_load_failed key=%s: %s", self._key, exc)
            entries = []
        self._entries = entries[: self._limit]

    def _write(self, entries: list[HistoryEntry]) -> None:
        try:
            self._store.put(self._key, _entries_adapter.dump_python(entries, mode="json", by_alias=True))
        except (sqlite3.Error, OSError) as exc:
            logger.error("history_write_failed key=%s: %s", self._key, exc)
            raise HistoryWriteError() from exc

    def persist(self) -> None:
        self._write(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        entries = [entry, *self._entries][: self._limit]
        self._write(entries)
        self._entries = entries

    def all(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
