"""Helpers - Pure utility functions with no side effects."""

from .rates import percentage, ratio, round_half_up
from .shot_taxonomy import (
    compose_spin,
    power_range,
    max_ball_number,
    format_value_label,
    format_game_type,
    format_outcome,
    GAME_TYPES,
    OUTCOMES,
)

__all__ = [
    'percentage',
    'ratio',
    'round_half_up',
    'compose_spin',
    'power_range',
    'max_ball_number',
    'format_value_label',
    'format_game_type',
    'format_outcome',
    'GAME_TYPES',
    'OUTCOMES',
]
