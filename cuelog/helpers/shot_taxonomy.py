"""Shot Taxonomy - Allowed values and pure mapping functions for shot attributes."""

import math
from typing import Optional

# Allowed values, in the order they are offered when logging
GAME_TYPES = ['8-ball', '9-ball', '10-ball', 'free-training']
PLAYER_MODES = ['single', 'double']
SHOT_TYPES = ['attack', 'defense']
CUT_ANGLES = ['8/8', '7/8', '6/8', '5/8', '4/8', '3/8', '2/8', '1/8']
DISTANCES = ['short', 'long']
TABLE_POSITIONS = ['open', 'rail', 'bank']
HORIZONTAL_SPINS = ['none', 'left', 'right']
VERTICAL_SPINS = ['none', 'top', 'bottom']
SPIN_TYPES = [
    'none', 'top', 'bottom', 'left', 'right',
    'top_left', 'top_right', 'bottom_left', 'bottom_right',
]
OUTCOMES = ['pocketed', 'safety', 'fail', 'miss', 'scratch']
CUE_BALL_CONTROLS = ['on_target', 'safe_zone', 'out_of_line']
ERROR_TYPES = ['none', 'aim', 'power', 'spin_deflection', 'mental']
STRATEGIC_INTENTS = ['positioning', 'safety', 'breakout', 'straight_shot']

POWER_RANGE = (1, 5)
CONFIDENCE_RANGE = (1, 10)
BREAK_BALLS_RANGE = (0, 15)
SPREAD_QUALITY_RANGE = (1, 10)

# Highest ball number on the table per game type (free training has no object ball)
BALLS_PER_GAME_TYPE = {
    '8-ball': 15,
    '9-ball': 9,
    '10-ball': 10,
    'free-training': 0,
}

POWER_LOW = 'Low (1-2)'
POWER_MEDIUM = 'Medium (3-4)'
POWER_HIGH = 'High (5)'


def compose_spin(horizontal: Optional[str], vertical: Optional[str], applied: bool = True) -> str:
    """
    Combine the two spin axes into a single spin category.

    This is a PURE FUNCTION.

    Args:
        horizontal: 'none', 'left' or 'right'
        vertical: 'none', 'top' or 'bottom'
        applied: False means no spin was put on the ball at all

    Returns:
        'top_left' style compound when both axes are active, the single
        active axis otherwise, or 'none'
    """
    if not applied:
        return 'none'

    horizontal = horizontal or 'none'
    vertical = vertical or 'none'

    if horizontal != 'none' and vertical != 'none':
        return f"{vertical}_{horizontal}"
    return horizontal if horizontal != 'none' else vertical


def power_range(power_level) -> Optional[str]:
    """
    Bucket a 1-5 power level into Low / Medium / High.

    Returns None when the power level is missing, not a number, or not finite.
    """
    if power_level is None or isinstance(power_level, bool):
        return None
    try:
        power = float(power_level)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(power):
        return None

    if power <= 2:
        return POWER_LOW
    if power <= 4:
        return POWER_MEDIUM
    return POWER_HIGH


def max_ball_number(game_type: str) -> int:
    """Highest valid ball number for a game type (0 when balls are not tracked)."""
    return BALLS_PER_GAME_TYPE.get(game_type, 15)


def format_value_label(value: str) -> str:
    """
    Display label for a categorical value: 'out_of_line' -> 'OUT OF LINE'.
    """
    return str(value).replace('_', ' ').replace('-', ' ').upper()


def format_game_type(game_type: str) -> str:
    """Display label for a game type: '8-ball' -> '8 BALL'."""
    return str(game_type).replace('-', ' ').upper()


def format_outcome(outcome: str) -> str:
    """Display label for an outcome: 'pocketed' -> 'Pocketed'."""
    outcome = str(outcome)
    return outcome[:1].upper() + outcome[1:]
