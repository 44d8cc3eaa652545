"""Player Repository - Database operations for players."""

import sqlite3
from abc import abstractmethod
from typing import Optional, List

from .base import BaseRepository, connect, to_timestamp, from_timestamp
from ..models.game import Player


class PlayerRepository(BaseRepository[Player]):
    """Abstract interface for player data access."""

    @abstractmethod
    def get_by_user(self, user_id: str) -> List[Player]:
        """Get all players created by a user."""
        pass


class SQLitePlayerRepository(PlayerRepository):
    """SQLite implementation of PlayerRepository."""

    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_connection(self) -> sqlite3.Connection:
        return connect(self.db_path, self.timeout)

    def _row_to_player(self, row) -> Player:
        return Player(
            player_id=row['player_id'],
            name=row['name'],
            user_id=row['user_id'],
            created_at=from_timestamp(row['created_at']),
        )

    def get_by_id(self, player_id: str) -> Optional[Player]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT * FROM players WHERE player_id = ?",
                (player_id,)
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._row_to_player(row)
        finally:
            conn.close()

    def get_all(self) -> List[Player]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT * FROM players ORDER BY name")
            return [self._row_to_player(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_by_user(self, user_id: str) -> List[Player]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT * FROM players WHERE user_id = ? ORDER BY name",
                (user_id,)
            )
            return [self._row_to_player(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def save(self, player: Player) -> None:
        conn = self._get_connection()
        try:
            conn.execute("""
                INSERT INTO players (player_id, name, user_id, created_at)
                VALUES (?, ?, ?, COALESCE(?, CURRENT_TIMESTAMP))
            """, (
                player.player_id, player.name, player.user_id,
                to_timestamp(player.created_at),
            ))
            conn.commit()
        finally:
            conn.close()

    def delete(self, player_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM players WHERE player_id = ?",
                (player_id,)
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def exists(self, player_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT 1 FROM players WHERE player_id = ?",
                (player_id,)
            )
            return cursor.fetchone() is not None
        finally:
            conn.close()


class MockPlayerRepository(PlayerRepository):
    """In-memory mock for testing."""

    def __init__(self):
        self.data: dict[str, Player] = {}

    def get_by_id(self, player_id: str) -> Optional[Player]:
        return self.data.get(player_id)

    def get_all(self) -> List[Player]:
        return list(self.data.values())

    def get_by_user(self, user_id: str) -> List[Player]:
        return [p for p in self.data.values() if p.user_id == user_id]

    def save(self, player: Player) -> None:
        self.data[player.player_id] = player

    def delete(self, player_id: str) -> bool:
        if player_id in self.data:
            del self.data[player_id]
            return True
        return False

    def exists(self, player_id: str) -> bool:
        return player_id in self.data
