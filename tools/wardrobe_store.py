"""Wardrobe storage abstractions and SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional

from models.garment import Garment


class WardrobeStore:
    """Persistence interface for garments; the engine's inventory provider."""

    def create_item(self, item: Garment) -> Garment:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[Garment]:
        raise NotImplementedError

    def get_items_by_ids(self, user_id: str, item_ids: Iterable[str]) -> List[Garment]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[Garment]:
        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for garments."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
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
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    item_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    name TEXT,
                    category TEXT NOT NULL,
                    styles TEXT,
                    colors TEXT,
                    materials TEXT,
                    patterns TEXT,
                    fit TEXT,
                    target_audience TEXT,
                    rating REAL,
                    PRIMARY KEY (user_id, item_id)
                );
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[Iterable[object]]) -> str:
        return json.dumps(list(values or []))

    @staticmethod
    def _deserialise_list(raw: str) -> List[object]:
        return json.loads(raw) if raw else []

    def create_item(self, item: Garment) -> Garment:
        if not item.user_id:
            raise ValueError(f"Garment {item.item_id} has no owner")
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO clothing_items (
                    item_id, user_id, name, category, styles, colors, materials,
                    patterns, fit, target_audience, rating
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.item_id,
                    item.user_id,
                    item.name,
                    item.category,
                    self._serialise_list(item.styles),
                    self._serialise_list(item.colors),
                    self._serialise_list(item.materials),
                    self._serialise_list(item.patterns),
                    item.fit,
                    item.target_audience,
                    item.rating,
                ),
            )
        return item

    def _row_to_item(self, row: sqlite3.Row) -> Garment:
        return Garment(
            item_id=row["item_id"],
            user_id=row["user_id"],
            name=row["name"] or "",
            category=row["category"],
            styles=self._deserialise_list(row["styles"]),
            colors=self._deserialise_list(row["colors"]),
            materials=self._deserialise_list(row["materials"]),
            patterns=self._deserialise_list(row["patterns"]),
            fit=row["fit"],
            target_audience=row["target_audience"],
            rating=row["rating"],
        )

    def get_item(self, user_id: str, item_id: str) -> Optional[Garment]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            row = cursor.fetchone()
            return self._row_to_item(row) if row else None

    def get_items_by_ids(self, user_id: str, item_ids: Iterable[str]) -> List[Garment]:
        ids = [str(item_id) for item_id in item_ids]
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with self._connect() as conn:
            cursor = conn.execute(
                f"SELECT * FROM clothing_items WHERE user_id = ? AND item_id IN ({placeholders})",
                [user_id, *ids],
            )
            by_id = {row["item_id"]: self._row_to_item(row) for row in cursor.fetchall()}
        return [by_id[item_id] for item_id in ids if item_id in by_id]

    def list_items_for_user(self, user_id: str) -> List[Garment]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY item_id",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def delete_item(self, user_id: str, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            return cursor.rowcount > 0


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
