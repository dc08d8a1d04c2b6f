"""Recommendation persistence interface and SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from models.recommendation import Recommendation


class RecommendationNotFound(LookupError):
    """Raised when a recommendation id does not exist."""


class RecommendationStore:
    """Persistence interface for recommendation records.

    The store, not the engine, is responsible for serialising concurrent
    writes for the same user.
    """

    def create_recommendation(self, record: Recommendation) -> Recommendation:
        raise NotImplementedError

    def get_recommendations(self, user_id: str) -> List[Recommendation]:
        raise NotImplementedError

    def get_recommendation(self, recommendation_id: int) -> Optional[Recommendation]:
        raise NotImplementedError

    def update_feedback(self, recommendation_id: int, feedback: str) -> Optional[Recommendation]:
        raise NotImplementedError

    def delete_recommendations(self, user_id: str) -> int:
        raise NotImplementedError

    def recommendations_available(self, user_id: str) -> bool:
        raise NotImplementedError

    def set_recommendations_available(self, user_id: str, available: bool) -> None:
        raise NotImplementedError


class SQLiteRecommendationStore(RecommendationStore):
    """Local SQLite-backed store for recommendation records."""

    def __init__(self, database_path: str | Path = "data/recommendations.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS recommendations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    item_ids TEXT NOT NULL,
                    item_key TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    feedback TEXT,
                    rating INTEGER
                );
                CREATE INDEX IF NOT EXISTS idx_recommendations_user ON recommendations(user_id);
                CREATE TABLE IF NOT EXISTS recommendation_status (
                    user_id TEXT PRIMARY KEY,
                    available INTEGER NOT NULL DEFAULT 0,
                    updated_at TEXT
                );
                """
            )

    def _row_to_record(self, row: sqlite3.Row) -> Recommendation:
        return Recommendation(
            recommendation_id=row["id"],
            user_id=row["user_id"],
            item_ids=json.loads(row["item_ids"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            feedback=row["feedback"],
            rating=row["rating"],
        )

    def create_recommendation(self, record: Recommendation) -> Recommendation:
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO recommendations (user_id, item_ids, item_key, created_at, feedback, rating)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record.user_id,
                    json.dumps(record.item_ids),
                    json.dumps(list(record.key)),
                    record.created_at.isoformat(),
                    record.feedback,
                    record.rating,
                ),
            )
            record.recommendation_id = cursor.lastrowid
        return record

    def get_recommendations(self, user_id: str) -> List[Recommendation]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM recommendations WHERE user_id = ? ORDER BY created_at DESC, id DESC",
                (user_id,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def get_recommendation(self, recommendation_id: int) -> Optional[Recommendation]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM recommendations WHERE id = ?", (recommendation_id,)
            ).fetchone()
        return self._row_to_record(row) if row else None

    def update_feedback(self, recommendation_id: int, feedback: str) -> Optional[Recommendation]:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE recommendations SET feedback = ? WHERE id = ?",
                (feedback, recommendation_id),
            )
            if cursor.rowcount == 0:
                return None
        return self.get_recommendation(recommendation_id)

    def delete_recommendations(self, user_id: str) -> int:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM recommendations WHERE user_id = ?", (user_id,))
            return cursor.rowcount

    def recommendations_available(self, user_id: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT available FROM recommendation_status WHERE user_id = ?", (user_id,)
            ).fetchone()
        return bool(row["available"]) if row else False

    def set_recommendations_available(self, user_id: str, available: bool) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO recommendation_status(user_id, available, updated_at) VALUES (?, ?, ?)\n"
                "ON CONFLICT(user_id) DO UPDATE SET available=excluded.available, updated_at=excluded.updated_at",
                (user_id, int(available), datetime.now(timezone.utc).isoformat()),
            )


__all__ = ["RecommendationNotFound", "RecommendationStore", "SQLiteRecommendationStore"]
