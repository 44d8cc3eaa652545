"""Shot logging commands."""

import click

from cuelog.helpers import shot_taxonomy as taxonomy
from cuelog.models.shot import ShotInput
from .output import exit_on_error, get_tracker


@click.group()
@click.pass_context
def shot(ctx):
    """Log shots."""
    pass


@shot.command('log')
@click.argument('game_id')
# Plan & setup
@click.option('--type', 'shot_type', type=click.Choice(taxonomy.SHOT_TYPES), default='attack', show_default=True)
@click.option('--ball', 'ball_number', type=int, help='Object ball number')
@click.option('--cut-angle', type=click.Choice(taxonomy.CUT_ANGLES), help='Cut angle in eighths')
@click.option('--distance', type=click.Choice(taxonomy.DISTANCES), default='short', show_default=True)
@click.option('--position', 'table_position', type=click.Choice(taxonomy.TABLE_POSITIONS),
              default='open', show_default=True)
# Execution
@click.option('--horizontal-spin', type=click.Choice(taxonomy.HORIZONTAL_SPINS), default='none', show_default=True)
@click.option('--vertical-spin', type=click.Choice(taxonomy.VERTICAL_SPINS), default='none', show_default=True)
@click.option('--power', 'power_level', type=click.IntRange(*taxonomy.POWER_RANGE), default=3, show_default=True)
# Result
@click.option('--outcome', type=click.Choice(taxonomy.OUTCOMES), default='pocketed', show_default=True)
@click.option('--cue-ball', 'cue_ball_control', type=click.Choice(taxonomy.CUE_BALL_CONTROLS),
              default='on_target', show_default=True)
@click.option('--error', 'error_type', type=click.Choice(taxonomy.ERROR_TYPES), default='none', show_default=True)
@click.option('--confidence', 'confidence_rating', type=click.IntRange(*taxonomy.CONFIDENCE_RANGE),
              default=10, show_default=True)
@click.option('--intent', 'strategic_intent', type=click.Choice(taxonomy.STRATEGIC_INTENTS))
@click.option('--notes', help='Free-text notes')
# Break shot
@click.option('--break/--no-break', 'is_break_shot', default=None,
              help='Mark as break shot (default: only the first shot of a game)')
@click.option('--break-balls', 'balls_pocketed_on_break', type=int, default=0, show_default=True,
              help='Balls pocketed on the break')
@click.option('--spread', 'break_spread_quality', type=int, default=5, show_default=True,
              help='Break spread quality (1-10)')
@click.pass_context
def log(ctx, game_id, horizontal_spin, vertical_spin, **fields):
    """Log the next shot of a game."""
    tracker = get_tracker(ctx)

    shot_input = ShotInput(
        spin_applied=horizontal_spin != 'none' or vertical_spin != 'none',
        horizontal_spin=horizontal_spin,
        vertical_spin=vertical_spin,
        **fields,
    )

    exit_on_error(tracker.shots.log_shot(tracker.user_id, game_id, shot_input))
