"""Performance insights shown under the dashboard summary."""

from dataclasses import dataclass
from typing import List

from ..models.analytics import GameStats


@dataclass
class Insight:
    headline: str
    detail: str


def accuracy_insight(shot_accuracy: int) -> Insight:
    if shot_accuracy >= 70:
        headline = 'Excellent accuracy!'
    elif shot_accuracy >= 50:
        headline = 'Good accuracy!'
    else:
        headline = 'Room for improvement!'
    return Insight(headline, f"Your shot accuracy is {shot_accuracy}%")


def win_rate_insight(win_rate: int) -> Insight:
    if win_rate >= 60:
        headline = 'Great win rate!'
    elif win_rate >= 40:
        headline = 'Solid performance!'
    else:
        headline = 'Keep practicing!'
    return Insight(headline, f"You win {win_rate}% of your games")


def performance_insights(stats: GameStats) -> List[Insight]:
    return [
        accuracy_insight(stats.shot_accuracy),
        win_rate_insight(stats.win_rate),
    ]
