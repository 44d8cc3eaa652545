from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any


@dataclass
class GameStats:
    """Headline numbers for the dashboard cards."""
    total_games: int = 0
    total_shots: int = 0
    avg_shots_per_game: int = 0
    games_won: int = 0
    win_rate: int = 0
    successful_shots: int = 0
    shot_accuracy: int = 0

    @property
    def games_lost(self) -> int:
        return self.total_games - self.games_won


@dataclass
class GameTypeSummary:
    """Games played and win rate for one game type."""
    game_type: str
    label: str  # 8 BALL, FREE TRAINING etc.
    games: int
    win_rate: int


@dataclass
class OutcomeShare:
    """How often one outcome occurred across all shots."""
    outcome: str
    label: str
    count: int
    percentage: int


@dataclass
class MonthlyActivity:
    """Games started and shots logged in one calendar month."""
    year: int
    month: int
    label: str  # Jan 25
    games: int
    shots: int

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass
class ShotAnalysis:
    """Success rate for one value of a shot attribute."""
    category: str  # Distance, Spin Type etc.
    value: str
    label: str
    total: int
    successful: int
    success_rate: int


@dataclass
class DashboardReport:
    """Everything the analytics dashboard shows, computed in one pass over games and shots."""
    stats: GameStats = field(default_factory=GameStats)
    game_types: List[GameTypeSummary] = field(default_factory=list)
    outcomes: List[OutcomeShare] = field(default_factory=list)
    monthly: List[MonthlyActivity] = field(default_factory=list)
    distance: List[ShotAnalysis] = field(default_factory=list)
    table_position: List[ShotAnalysis] = field(default_factory=list)
    cut_angle: List[ShotAnalysis] = field(default_factory=list)
    power_level: List[ShotAnalysis] = field(default_factory=list)
    spin: List[ShotAnalysis] = field(default_factory=list)
    cue_ball_control: List[ShotAnalysis] = field(default_factory=list)
    shot_type: List[ShotAnalysis] = field(default_factory=list)
    strategic_intent: List[ShotAnalysis] = field(default_factory=list)

    @property
    def shot_analyses(self) -> Dict[str, List[ShotAnalysis]]:
        """All eight shot breakdowns keyed by shot field, in dashboard order."""
        return {
            'distance': self.distance,
            'table_position': self.table_position,
            'cut_angle': self.cut_angle,
            'power_level': self.power_level,
            'spin': self.spin,
            'cue_ball_control': self.cue_ball_control,
            'shot_type': self.shot_type,
            'strategic_intent': self.strategic_intent,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data['stats']['games_lost'] = self.stats.games_lost
        return data
