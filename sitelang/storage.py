"""Persisted user preferences (the stored language choice)."""

import logging
import os
import sqlite3
from datetime import datetime

log = logging.getLogger("sitelang.storage")


class PreferenceStorage:
    """Persist string preferences to SQLite so they survive restarts."""

    def __init__(self, db_path):
        self.db_path = db_path
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def get(self, key, default=None):
        """Return the stored value or ``default``. Read errors are logged, not raised."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM preferences WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            log.error("Failed to read preference %s: %s", key, e)
            return default
        return row[0] if row else default

    def set(self, key, value):
        ts = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT INTO preferences (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, value, ts),
            )
        log.debug("Preference saved: %s=%s", key, value)


class MemoryPreferences:
    """In-process preference store with the same interface. Also counts writes."""

    def __init__(self, initial=None):
        self._values = dict(initial or {})
        self.writes = 0

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value
        self.writes += 1
