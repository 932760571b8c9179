"""
Spawner Trace Logger — SQLite-based audit trail for MCP tool calls.

One row per call: tool name, JSON arguments, a preview of the returned
text, the error message (empty on success), wall time and the MCP
session that issued it.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

RESULT_PREVIEW_CHARS = 2000

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS tool_calls (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp TEXT NOT NULL,
        tool TEXT NOT NULL,
        args TEXT,
        result TEXT,
        error TEXT NOT NULL DEFAULT '',
        duration_ms INTEGER,
        session_id TEXT NOT NULL DEFAULT ''
    );
    CREATE INDEX IF NOT EXISTS idx_tool_calls_tool ON tool_calls(tool);
    CREATE INDEX IF NOT EXISTS idx_tool_calls_session ON tool_calls(session_id);
"""


class TraceLogger:
    """Persists MCP tool calls and answers simple audit queries over them."""

    def __init__(self, db_path: Optional[str] = None):
        path = Path(db_path) if db_path else Path("~/.spawner/trace.db").expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)

        self.db_path = str(path)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.executescript(_SCHEMA)
        logger.debug("Trace log opened at %s", self.db_path)

    def log(
        self,
        tool: str,
        args: dict,
        result: str = "",
        error: str = "",
        duration_ms: Optional[int] = None,
        session_id: str = "",
    ):
        """Record one call. Only the first RESULT_PREVIEW_CHARS of the result are kept."""
        with self.conn:
            self.conn.execute(
                "INSERT INTO tool_calls (timestamp, tool, args, result, error, duration_ms, session_id) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    datetime.now(timezone.utc).isoformat(),
                    tool,
                    json.dumps(args, ensure_ascii=False, default=str),
                    (result or "")[:RESULT_PREVIEW_CHARS],
                    error or "",
                    duration_ms,
                    session_id or "",
                ),
            )

    def _select(
        self,
        where: str = "",
        params: Sequence = (),
        limit: Optional[int] = None,
        newest_first: bool = True,
    ) -> List[Dict]:
        sql = "SELECT * FROM tool_calls"
        if where:
            sql += f" WHERE {where}"
        sql += " ORDER BY id DESC" if newest_first else " ORDER BY id ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params = (*params, limit)
        return [dict(row) for row in self.conn.execute(sql, params)]

    def get_recent(self, limit: int = 10) -> List[Dict]:
        return self._select(limit=limit)

    def by_session(self, session_id: str, limit: int = 50) -> List[Dict]:
        return self._select("session_id = ?", (session_id,), limit)

    def by_tool(self, tool_name: str, limit: int = 50) -> List[Dict]:
        return self._select("tool = ?", (tool_name,), limit)

    def failures(self, limit: int = 50) -> List[Dict]:
        """Most recent calls that ended in an error."""
        return self._select("error != ''", (), limit)

    def stats(self) -> Dict[str, Dict]:
        """Per-tool call count, failure count and mean duration."""
        cursor = self.conn.execute(
            "SELECT tool, COUNT(*) AS calls, "
            "SUM(CASE WHEN error != '' THEN 1 ELSE 0 END) AS failures, "
            "AVG(duration_ms) AS avg_ms "
            "FROM tool_calls GROUP BY tool ORDER BY tool"
        )
        return {
            row["tool"]: {
                "calls": row["calls"],
                "failures": row["failures"],
                "avg_ms": round(row["avg_ms"], 1) if row["avg_ms"] is not None else None,
            }
            for row in cursor
        }

    def export_json(self, session_id: Optional[str] = None) -> str:
        """Dump calls oldest first as JSON, optionally for one session."""
        if session_id:
            rows = self._select("session_id = ?", (session_id,), newest_first=False)
        else:
            rows = self._select(newest_first=False)
        return json.dumps(rows, ensure_ascii=False, indent=2)

    def close(self):
        self.conn.close()
