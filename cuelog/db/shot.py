"""Shot Repository - Database operations for logged shots.

Shots are insert-only: there is no update path, and they are removed only
together with their game.
"""

import sqlite3
from abc import abstractmethod
from dataclasses import replace
from typing import Optional, List, Sequence

from .base import BaseRepository, connect, to_timestamp, from_timestamp
from ..models.shot import Shot

SHOT_COLUMNS = [
    'shot_id', 'game_id', 'player_id', 'shot_number', 'rack',
    'shot_type', 'ball_number', 'cut_angle', 'distance', 'table_position',
    'spin', 'power_level',
    'outcome', 'cue_ball_control', 'error_type', 'confidence_rating',
    'strategic_intent', 'notes',
    'is_break_shot', 'balls_pocketed_on_break', 'break_spread_quality',
]


class ShotRepository(BaseRepository[Shot]):
    """Abstract interface for shot data access."""

    @abstractmethod
    def get_by_game(self, game_id: str) -> List[Shot]:
        """Get all shots of a game ordered by shot number."""
        pass

    @abstractmethod
    def get_by_game_ids(self, game_ids: Sequence[str]) -> List[Shot]:
        """Get all shots belonging to any of the given games."""
        pass

    @abstractmethod
    def count_by_game(self, game_id: str) -> int:
        """Number of shots logged for a game."""
        pass


class SQLiteShotRepository(ShotRepository):
    """SQLite implementation of ShotRepository."""

    # SQLite's default limit on bound parameters is 999
    MAX_IDS_PER_QUERY = 500

    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_connection(self) -> sqlite3.Connection:
        return connect(self.db_path, self.timeout)

    def _row_to_shot(self, row) -> Shot:
        """Convert database row to Shot dataclass."""
        return Shot(
            shot_id=row['shot_id'],
            game_id=row['game_id'],
            player_id=row['player_id'],
            shot_number=row['shot_number'],
            rack=row['rack'],
            shot_type=row['shot_type'],
            ball_number=row['ball_number'],
            cut_angle=row['cut_angle'],
            distance=row['distance'],
            table_position=row['table_position'],
            spin=row['spin'],
            power_level=row['power_level'],
            outcome=row['outcome'],
            cue_ball_control=row['cue_ball_control'],
            error_type=row['error_type'],
            confidence_rating=row['confidence_rating'],
            strategic_intent=row['strategic_intent'],
            notes=row['notes'],
            is_break_shot=bool(row['is_break_shot']),
            balls_pocketed_on_break=row['balls_pocketed_on_break'],
            break_spread_quality=row['break_spread_quality'],
            created_at=from_timestamp(row['created_at']),
        )

    def get_by_id(self, shot_id: str) -> Optional[Shot]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT * FROM shots WHERE shot_id = ?",
                (shot_id,)
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._row_to_shot(row)
        finally:
            conn.close()

    def get_all(self) -> List[Shot]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT * FROM shots ORDER BY game_id, shot_number")
            return [self._row_to_shot(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_by_game(self, game_id: str) -> List[Shot]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT * FROM shots WHERE game_id = ? ORDER BY shot_number ASC",
                (game_id,)
            )
            return [self._row_to_shot(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_by_game_ids(self, game_ids: Sequence[str]) -> List[Shot]:
        game_ids = list(game_ids)
        if not game_ids:
            return []

        conn = self._get_connection()
        try:
            shots = []
            for start in range(0, len(game_ids), self.MAX_IDS_PER_QUERY):
                chunk = game_ids[start:start + self.MAX_IDS_PER_QUERY]
                placeholders = ', '.join('?' for _ in chunk)
                cursor = conn.execute(
                    f"SELECT * FROM shots WHERE game_id IN ({placeholders}) "
                    f"ORDER BY game_id, shot_number",
                    chunk
                )
                shots.extend(self._row_to_shot(row) for row in cursor.fetchall())
            return shots
        finally:
            conn.close()

    def count_by_game(self, game_id: str) -> int:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM shots WHERE game_id = ?",
                (game_id,)
            )
            return cursor.fetchone()[0]
        finally:
            conn.close()

    def save(self, shot: Shot) -> None:
        """Insert a shot. Raises sqlite3.IntegrityError if it already exists."""
        values = [getattr(shot, column) for column in SHOT_COLUMNS]
        values[SHOT_COLUMNS.index('is_break_shot')] = int(bool(shot.is_break_shot))

        conn = self._get_connection()
        try:
            conn.execute(
                f"INSERT INTO shots ({', '.join(SHOT_COLUMNS)}, created_at) "
                f"VALUES ({', '.join('?' for _ in SHOT_COLUMNS)}, COALESCE(?, CURRENT_TIMESTAMP))",
                values + [to_timestamp(shot.created_at)]
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, shot_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM shots WHERE shot_id = ?",
                (shot_id,)
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def exists(self, shot_id: str) -> bool:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT 1 FROM shots WHERE shot_id = ?",
                (shot_id,)
            )
            return cursor.fetchone() is not None
        finally:
            conn.close()


class MockShotRepository(ShotRepository):
    """In-memory mock for testing."""

    def __init__(self):
        self.data: dict[str, Shot] = {}
        self._fail_with: Optional[Exception] = None

    def set_failure(self, error: Optional[Exception]) -> None:
        """Test helper: make every read and write raise ``error``."""
        self._fail_with = error

    def _check_failure(self) -> None:
        if self._fail_with is not None:
            raise self._fail_with

    def get_by_id(self, shot_id: str) -> Optional[Shot]:
        self._check_failure()
        return self.data.get(shot_id)

    def get_all(self) -> List[Shot]:
        self._check_failure()
        return list(self.data.values())

    def get_by_game(self, game_id: str) -> List[Shot]:
        self._check_failure()
        return sorted(
            (s for s in self.data.values() if s.game_id == game_id),
            key=lambda s: s.shot_number,
        )

    def get_by_game_ids(self, game_ids: Sequence[str]) -> List[Shot]:
        self._check_failure()
        wanted = set(game_ids)
        return [s for s in self.data.values() if s.game_id in wanted]

    def count_by_game(self, game_id: str) -> int:
        return len(self.get_by_game(game_id))

    def save(self, shot: Shot) -> None:
        self._check_failure()
        if shot.shot_id in self.data:
            raise sqlite3.IntegrityError(f"shot {shot.shot_id} already exists")
        self.data[shot.shot_id] = replace(shot)

    def delete(self, shot_id: str) -> bool:
        if shot_id in self.data:
            del self.data[shot_id]
            return True
        return False

    def delete_by_game(self, game_id: str) -> int:
        """Drop every shot of a game, as the games -> shots cascade does."""
        doomed = [s.shot_id for s in self.data.values() if s.game_id == game_id]
        for shot_id in doomed:
            del self.data[shot_id]
        return len(doomed)

    def exists(self, shot_id: str) -> bool:
        return shot_id in self.data
