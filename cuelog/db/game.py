"""Game Repository - Database operations for games.

Every user-facing query takes the current user's id explicitly; a game owned
by someone else is indistinguishable from a missing one.
"""

import sqlite3
from abc import abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import Optional, List

from .base import BaseRepository, connect, to_timestamp, from_timestamp
from ..models.game import Game

GAME_SELECT = """
    SELECT g.*, pa.name AS player_a_name, pb.name AS player_b_name
    FROM games g
    LEFT JOIN players pa ON pa.player_id = g.player_a_id
    LEFT JOIN players pb ON pb.player_id = g.player_b_id
"""


class GameRepository(BaseRepository[Game]):
    """Abstract interface for game data access."""

    @abstractmethod
    def get_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Game]:
        """Get a user's games, most recently started first."""
        pass

    @abstractmethod
    def get_for_user(self, game_id: str, user_id: str) -> Optional[Game]:
        """Get one game if it belongs to the user."""
        pass

    @abstractmethod
    def update_progress(self, game_id: str, user_id: str, team_a_score: int,
                        team_b_score: int, current_rack: int) -> bool:
        """Update scores and rack counter. Returns True if a row changed."""
        pass

    @abstractmethod
    def mark_completed(self, game_id: str, user_id: str, completed_at: datetime) -> bool:
        """Set the completion time. Returns True if a row changed."""
        pass

    @abstractmethod
    def delete_for_user(self, game_id: str, user_id: str) -> bool:
        """Delete a user's game and its shots. Returns True if deleted."""
        pass


class SQLiteGameRepository(GameRepository):
    """SQLite implementation of GameRepository."""

    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_connection(self) -> sqlite3.Connection:
        return connect(self.db_path, self.timeout)

    def _row_to_game(self, row) -> Game:
        """Convert database row to Game dataclass."""
        keys = row.keys()
        return Game(
            game_id=row['game_id'],
            user_id=row['user_id'],
            game_type=row['game_type'],
            player_mode=row['player_mode'],
            player_a_id=row['player_a_id'],
            player_b_id=row['player_b_id'],
            team_a_score=row['team_a_score'] or 0,
            team_b_score=row['team_b_score'] or 0,
            current_rack=row['current_rack'] or 1,
            started_at=from_timestamp(row['started_at']),
            completed_at=from_timestamp(row['completed_at']),
            player_a_name=row['player_a_name'] if 'player_a_name' in keys else None,
            player_b_name=row['player_b_name'] if 'player_b_name' in keys else None,
        )

    def get_by_id(self, game_id: str) -> Optional[Game]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                GAME_SELECT + " WHERE g.game_id = ?",
                (game_id,)
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._row_to_game(row)
        finally:
            conn.close()

    def get_all(self) -> List[Game]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(GAME_SELECT + " ORDER BY g.started_at DESC")
            return [self._row_to_game(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Game]:
        conn = self._get_connection()
        try:
            query = GAME_SELECT + " WHERE g.user_id = ? ORDER BY g.started_at DESC"
            params: tuple = (user_id,)
            if limit is not None:
                query += " LIMIT ?"
                params = (user_id, limit)
            cursor = conn.execute(query, params)
            return [self._row_to_game(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_for_user(self, game_id: str, user_id: str) -> Optional[Game]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                GAME_SELECT + " WHERE g.game_id = ? AND g.user_id = ?",
                (game_id, user_id)
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._row_to_game(row)
        finally:
            conn.close()

    def save(self, game: Game) -> None:
        conn = self._get_connection()
        try:
            conn.execute("""
                INSERT INTO games
                (game_id, user_id, game_type, player_mode, player_a_id, player_b_id,
                 team_a_score, team_b_score, current_rack, started_at, completed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                game.game_id, game.user_id, game.game_type, game.player_mode,
                game.player_a_id, game.player_b_id,
                game.team_a_score, game.team_b_score, game.current_rack,
                to_timestamp(game.started_at or datetime.now()),
                to_timestamp(game.completed_at),
            ))
            conn.commit()
        finally:
            conn.close()

    def update_progress(self, game_id: str, user_id: str, team_a_score: int,
                        team_b_score: int, current_rack: int) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute("""
                UPDATE games
                SET team_a_score = ?, team_b_score = ?, current_rack = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE game_id = ? AND user_id = ?
            """, (team_a_score, team_b_score, current_rack, game_id, user_id))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def mark_completed(self, game_id: str, user_id: str, completed_at: datetime) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute("""
                UPDATE games
                SET completed_at = ?, updated_at = CURRENT_TIMESTAMP
                WHERE game_id = ? AND user_id = ?
            """, (to_timestamp(completed_at), game_id, user_id))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def delete(self, game_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM games WHERE game_id = ?",
                (game_id,)
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def delete_for_user(self, game_id: str, user_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM games WHERE game_id = ? AND user_id = ?",
                (game_id, user_id)
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def exists(self, game_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT 1 FROM games WHERE game_id = ?",
                (game_id,)
            )
            return cursor.fetchone() is not None
        finally:
            conn.close()


class MockGameRepository(GameRepository):
    """In-memory mock for testing."""

    def __init__(self):
        self.data: dict[str, Game] = {}
        self.shot_repository = None  # set to a MockShotRepository to cascade deletes

    def get_by_id(self, game_id: str) -> Optional[Game]:
        return self.data.get(game_id)

    def get_all(self) -> List[Game]:
        return sorted(self.data.values(), key=lambda g: g.started_at or datetime.min, reverse=True)

    def get_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Game]:
        games = [g for g in self.get_all() if g.user_id == user_id]
        return games[:limit] if limit is not None else games

    def get_for_user(self, game_id: str, user_id: str) -> Optional[Game]:
        game = self.data.get(game_id)
        if game is None or game.user_id != user_id:
            return None
        return game

    def save(self, game: Game) -> None:
        self.data[game.game_id] = replace(game, started_at=game.started_at or datetime.now())

    def update_progress(self, game_id: str, user_id: str, team_a_score: int,
                        team_b_score: int, current_rack: int) -> bool:
        game = self.get_for_user(game_id, user_id)
        if game is None:
            return False
        self.data[game_id] = replace(game, team_a_score=team_a_score, team_b_score=team_b_score,
                                     current_rack=current_rack)
        return True

    def mark_completed(self, game_id: str, user_id: str, completed_at: datetime) -> bool:
        game = self.get_for_user(game_id, user_id)
        if game is None:
            return False
        self.data[game_id] = replace(game, completed_at=completed_at)
        return True

    def delete(self, game_id: str) -> bool:
        if game_id not in self.data:
            return False
        del self.data[game_id]
        if self.shot_repository is not None:
            self.shot_repository.delete_by_game(game_id)
        return True

    def delete_for_user(self, game_id: str, user_id: str) -> bool:
        if self.get_for_user(game_id, user_id) is None:
            return False
        return self.delete(game_id)

    def exists(self, game_id: str) -> bool:
        return game_id in self.data
