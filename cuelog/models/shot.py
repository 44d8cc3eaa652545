from dataclasses import dataclass
from typing import Optional
from datetime import datetime


@dataclass(frozen=True)
class Shot:
    """A single logged shot. Shots are never updated once written."""
    shot_id: str
    game_id: str
    shot_number: int
    rack: int
    player_id: Optional[str] = None

    # Plan & setup
    shot_type: Optional[str] = None
    ball_number: Optional[int] = None
    cut_angle: Optional[str] = None
    distance: Optional[str] = None
    table_position: Optional[str] = None

    # Execution
    spin: Optional[str] = None
    power_level: Optional[int] = None

    # Result
    outcome: Optional[str] = None
    cue_ball_control: Optional[str] = None
    error_type: Optional[str] = None
    confidence_rating: Optional[int] = None
    strategic_intent: Optional[str] = None
    notes: Optional[str] = None

    # Break shot only
    is_break_shot: bool = False
    balls_pocketed_on_break: Optional[int] = None
    break_spread_quality: Optional[int] = None

    created_at: Optional[datetime] = None

    @property
    def is_pocketed(self) -> bool:
        return self.outcome == 'pocketed'

    def __str__(self) -> str:
        ball = self.ball_number if self.ball_number is not None else 'N/A'
        angle = self.cut_angle or 'N/A'
        return (f"Shot #{self.shot_number} [{self.outcome}] type={self.shot_type} "
                f"ball={ball} angle={angle} power={self.power_level}/5 "
                f"confidence={self.confidence_rating}/10")


@dataclass
class ShotInput:
    """Raw values captured when logging a shot, before numbering and spin composition."""
    shot_type: str = 'attack'
    ball_number: Optional[int] = None
    cut_angle: Optional[str] = None
    distance: str = 'short'
    table_position: str = 'open'
    spin_applied: bool = False
    horizontal_spin: str = 'none'
    vertical_spin: str = 'none'
    power_level: int = 3
    outcome: str = 'pocketed'
    cue_ball_control: str = 'on_target'
    error_type: str = 'none'
    confidence_rating: int = 10
    strategic_intent: Optional[str] = None
    notes: Optional[str] = None
    # None means "break shot if this is the first shot of the game"
    is_break_shot: Optional[bool] = None
    balls_pocketed_on_break: int = 0
    break_spread_quality: int = 5
