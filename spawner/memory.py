"""
Spawner Project Memory — persistent key/value decisions and context.

Entries live in SQLite so they survive across sessions. A legacy
memory.json file (one object keyed by entry key) can be imported once.
"""

import json
import logging
import os
import sqlite3
import time
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ProjectMemory:
    """Key/value store for project-level decisions."""

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            db_path = str(Path("~/.spawner/memory.db").expanduser())

        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)

        self.db_path = db_path
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self):
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS memory (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                timestamp INTEGER NOT NULL
            )
        """)
        self.conn.commit()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> Dict:
        return {"key": row["key"], "value": row["value"], "timestamp": row["timestamp"]}

    def set(self, key: str, value: str, timestamp: Optional[int] = None) -> Dict:
        """Store *value* under *key*, replacing any previous entry."""
        entry = {"key": key, "value": value, "timestamp": timestamp if timestamp is not None else _now_ms()}
        self.conn.execute(
            """INSERT INTO memory (key, value, timestamp) VALUES (?, ?, ?)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value, timestamp = excluded.timestamp""",
            (entry["key"], entry["value"], entry["timestamp"]),
        )
        self.conn.commit()
        return entry

    def get(self, key: str) -> Optional[Dict]:
        cursor = self.conn.execute(
            "SELECT key, value, timestamp FROM memory WHERE key = ?", (key,)
        )
        row = cursor.fetchone()
        return self._row_to_entry(row) if row else None

    def list(self) -> List[Dict]:
        """All entries, newest first."""
        cursor = self.conn.execute(
            "SELECT key, value, timestamp FROM memory ORDER BY timestamp DESC, rowid DESC"
        )
        return [self._row_to_entry(r) for r in cursor.fetchall()]

    def close(self):
        self.conn.close()

    # ------------------------------------------------------------------
    # Migration: memory.json → memory table
    # ------------------------------------------------------------------

    def migrate_json(self, json_path: Optional[str] = None) -> int:
        """Import a legacy memory.json file.

        Keys already present in the table are left untouched.
        Returns the number of entries imported.
        """
        if json_path is None:
            json_path = str(Path("~/.spawner/memory.json").expanduser())

        if not os.path.exists(json_path):
            logger.info("No memory.json found at %s — nothing to migrate", json_path)
            return 0

        try:
            with open(json_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load %s: %s", json_path, e)
            return 0
        if not isinstance(data, dict):
            logger.warning("Unexpected memory.json layout in %s", json_path)
            return 0

        count = 0
        for key, entry in data.items():
            if not isinstance(entry, dict) or "value" not in entry:
                logger.warning("Skipping malformed memory entry: %s", key)
                continue
            cursor = self.conn.execute(
                "INSERT OR IGNORE INTO memory (key, value, timestamp) VALUES (?, ?, ?)",
                (entry.get("key", key), str(entry["value"]), int(entry.get("timestamp") or _now_ms())),
            )
            count += cursor.rowcount

        self.conn.commit()
        logger.info("Migrated %d memory entries from %s", count, json_path)
        return count
