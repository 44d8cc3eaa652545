"""Analytics - Dashboard aggregation over games and shots."""

from .aggregator import (
    compute_dashboard,
    calculate_game_stats,
    game_type_breakdown,
    outcome_distribution,
    monthly_activity,
    game_won,
)
from .breakdowns import (
    analyze_shots,
    analyze_field,
    analyze_power_levels,
    SHOT_ANALYSIS_FIELDS,
)
from .insights import performance_insights, Insight

__all__ = [
    'compute_dashboard',
    'calculate_game_stats',
    'game_type_breakdown',
    'outcome_distribution',
    'monthly_activity',
    'game_won',
    'analyze_shots',
    'analyze_field',
    'analyze_power_levels',
    'SHOT_ANALYSIS_FIELDS',
    'performance_insights',
    'Insight',
]
