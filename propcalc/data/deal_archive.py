"""SQLite archive of development deal drafts."""

import json
import logging
import sqlite3
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from propcalc.models.deal import DealDraft

logger = logging.getLogger(__name__)


class DealNotFoundError(LookupError):
    def __init__(self, deal_id: str):
        super().__init__(f"No saved deal with id {deal_id!r}")
        self.deal_id = deal_id


class DealArchive:
    def __init__(self, db_path: str = "data/deals.db"):
        self.db_path = db_path
        # An in-memory database lives only as long as its connection, so keep one open.
        self._memory_conn: sqlite3.Connection | None = None
        if db_path == ":memory:":
            self._memory_conn = sqlite3.connect(db_path, check_same_thread=False)
            self._memory_conn.row_factory = sqlite3.Row
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        if self._memory_conn is not None:
            return self._memory_conn
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS deals (
                    id TEXT PRIMARY KEY,
                    name TEXT,
                    address TEXT,
                    local_authority TEXT,
                    status TEXT,
                    current_step INTEGER,
                    draft_json TEXT,
                    created_at TIMESTAMP,
                    updated_at TIMESTAMP
                );

                CREATE INDEX IF NOT EXISTS deals_updated_at ON deals (updated_at);
            """)

    def save(self, draft: DealDraft) -> DealDraft:
        """Insert the draft, or replace the saved copy with the same id.

        Returns the draft with its archive id set.
        """
        if draft.id is None:
            draft = replace(draft, id=uuid.uuid4().hex)
        now = datetime.now(timezone.utc).isoformat()
        status = "complete" if draft.is_complete else "draft"
        with self._connect() as conn:
            row = conn.execute("SELECT created_at FROM deals WHERE id = ?", (draft.id,)).fetchone()
            created_at = row["created_at"] if row else now
            conn.execute(
                "INSERT OR REPLACE INTO deals "
                "(id, name, address, local_authority, status, current_step, draft_json, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    draft.id,
                    f"Deal: {draft.address}",
                    draft.address,
                    draft.local_authority,
                    status,
                    draft.current_step,
                    json.dumps(draft.to_dict(), default=str),
                    created_at,
                    now,
                ),
            )
        logger.info("Saved deal %s (%s, step %s)", draft.id, status, draft.current_step)
        return draft

    def get(self, deal_id: str) -> DealDraft:
        with self._connect() as conn:
            row = conn.execute("SELECT draft_json FROM deals WHERE id = ?", (deal_id,)).fetchone()
        if row is None:
            raise DealNotFoundError(deal_id)
        return DealDraft.from_dict(json.loads(row["draft_json"]))

    def list_recent(self, limit: int = 20) -> list[dict]:
        """Summary rows for the most recently updated deals."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, name, address, local_authority, status, current_step, created_at, updated_at "
                "FROM deals ORDER BY updated_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [dict(row) for row in rows]
