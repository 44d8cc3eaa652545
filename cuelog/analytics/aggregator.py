"""Dashboard Aggregator - Pure functions turning games and shots into dashboard metrics.

Nothing here does I/O or mutates its inputs. Games and shots may be model
objects or raw row mappings; a missing field excludes the record from the
breakdown that needs it.
"""

from collections import Counter
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..helpers.rates import percentage, ratio
from ..helpers.shot_taxonomy import format_game_type, format_outcome
from ..models.analytics import (
    DashboardReport,
    GameStats,
    GameTypeSummary,
    MonthlyActivity,
    OutcomeShare,
)
from .breakdowns import (
    SHOT_ANALYSIS_FIELDS,
    analyze_field,
    analyze_power_levels,
    field_value,
    is_pocketed,
)

MONTHS_SHOWN = 6
UNKNOWN_OUTCOME = 'unknown'


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        # fromisoformat rejects a trailing Z before 3.11
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def game_won(game: Any) -> bool:
    """
    True when side A won a completed game.

    The rule is one-sided: a tie, or a game still in progress, is not a win.
    """
    if not field_value(game, 'completed_at'):
        return False
    return _as_int(field_value(game, 'team_a_score')) > _as_int(field_value(game, 'team_b_score'))


def calculate_game_stats(games: Sequence[Any], shots: Sequence[Any]) -> GameStats:
    """Headline totals, win rate and shot accuracy."""
    total_games = len(games)
    total_shots = len(shots)
    games_won = sum(1 for game in games if game_won(game))
    successful_shots = sum(1 for shot in shots if is_pocketed(shot))

    return GameStats(
        total_games=total_games,
        total_shots=total_shots,
        avg_shots_per_game=ratio(total_shots, total_games),
        games_won=games_won,
        win_rate=percentage(games_won, total_games),
        successful_shots=successful_shots,
        shot_accuracy=percentage(successful_shots, total_shots),
    )


def game_type_breakdown(games: Sequence[Any]) -> List[GameTypeSummary]:
    """Games played and win rate per game type, in encounter order."""
    groups: Dict[str, Dict[str, int]] = {}

    for game in games:
        game_type = field_value(game, 'game_type')
        if not game_type:
            continue
        tally = groups.setdefault(game_type, {'games': 0, 'wins': 0})
        tally['games'] += 1
        if game_won(game):
            tally['wins'] += 1

    return [
        GameTypeSummary(
            game_type=game_type,
            label=format_game_type(game_type),
            games=tally['games'],
            win_rate=percentage(tally['wins'], tally['games']),
        )
        for game_type, tally in groups.items()
    ]


def outcome_distribution(shots: Sequence[Any]) -> List[OutcomeShare]:
    """Share of each outcome across all shots; shots without one count as 'unknown'."""
    counts: Counter = Counter()
    for shot in shots:
        counts[field_value(shot, 'outcome') or UNKNOWN_OUTCOME] += 1

    total_shots = len(shots)
    # Counter keeps first-seen order
    return [
        OutcomeShare(
            outcome=outcome,
            label=format_outcome(outcome),
            count=count,
            percentage=percentage(count, total_shots),
        )
        for outcome, count in counts.items()
    ]


def monthly_activity(
    games: Sequence[Any],
    shots: Sequence[Any],
    months: int = MONTHS_SHOWN,
) -> List[MonthlyActivity]:
    """
    Games and shots per calendar month of each game's start.

    Buckets are sorted chronologically and only the most recent ``months``
    are kept. Games without a readable start time are left out.
    """
    shots_per_game: Counter = Counter(field_value(shot, 'game_id') for shot in shots)
    buckets: Dict[Tuple[int, int], Dict[str, int]] = {}

    for game in games:
        started_at = _as_datetime(field_value(game, 'started_at'))
        if started_at is None:
            continue
        tally = buckets.setdefault((started_at.year, started_at.month), {'games': 0, 'shots': 0})
        tally['games'] += 1
        tally['shots'] += shots_per_game.get(field_value(game, 'game_id'), 0)

    ordered = sorted(buckets.items())
    if months > 0:
        ordered = ordered[-months:]
    else:
        ordered = []

    return [
        MonthlyActivity(
            year=year,
            month=month,
            label=date(year, month, 1).strftime('%b %y'),
            games=tally['games'],
            shots=tally['shots'],
        )
        for (year, month), tally in ordered
    ]


def compute_dashboard(games: Sequence[Any], shots: Sequence[Any]) -> DashboardReport:
    """
    Compute every dashboard metric for one user's games and their shots.

    This is a PURE FUNCTION:
    - Same input always gives same output
    - No side effects
    - Empty input gives zeros, never an error

    Args:
        games: All games of the user
        shots: All shots belonging to those games

    Returns:
        DashboardReport with the summary and every breakdown
    """
    games = list(games or [])
    shots = list(shots or [])

    breakdowns = {
        field: analyze_field(shots, field, category)
        for field, category in SHOT_ANALYSIS_FIELDS.items()
    }

    return DashboardReport(
        stats=calculate_game_stats(games, shots),
        game_types=game_type_breakdown(games),
        outcomes=outcome_distribution(shots),
        monthly=monthly_activity(games, shots),
        power_level=analyze_power_levels(shots),
        **breakdowns,
    )
