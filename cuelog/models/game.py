from dataclasses import dataclass
from typing import Optional
from datetime import datetime


@dataclass
class Player:
    """A named player created by a user."""
    player_id: str
    name: str
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Game:
    """A practice game or match, owned by one user."""
    game_id: str
    user_id: str
    game_type: str
    player_mode: str
    player_a_id: Optional[str] = None
    player_b_id: Optional[str] = None
    team_a_score: int = 0
    team_b_score: int = 0
    current_rack: int = 1
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    # Display names, filled in by repositories that join players
    player_a_name: Optional[str] = None
    player_b_name: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.completed_at is not None

    @property
    def is_training(self) -> bool:
        return self.game_type == 'free-training'

    @property
    def is_won(self) -> bool:
        # Side A wins only on a strictly higher score; ties are not wins
        if not self.is_complete:
            return False
        return (self.team_a_score or 0) > (self.team_b_score or 0)

    @property
    def status(self) -> str:
        return "Completed" if self.is_complete else "In Progress"

    @property
    def score(self) -> str:
        return f"{self.team_a_score} - {self.team_b_score}"

    @property
    def players(self) -> str:
        names = self.player_a_name or ''
        if self.player_mode == 'double' and self.player_b_name:
            names = f"{names} vs {self.player_b_name}"
        return names

    def __str__(self) -> str:
        started = self.started_at.date() if self.started_at else '?'
        return f"{started} {self.game_type} {self.score} ({self.status})"
