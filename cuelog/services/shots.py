"""Shot Logger - Validates and records shots against a running game."""

import logging
import sqlite3
import uuid
from typing import List, Optional

from .base import BaseService, Result
from ..db.game import GameRepository
from ..db.shot import ShotRepository
from ..db.retry import RetryStrategy
from ..helpers import shot_taxonomy as taxonomy
from ..models.game import Game
from ..models.shot import Shot, ShotInput

logger = logging.getLogger(__name__)


def _check_choice(errors: List[str], name: str, value, allowed, optional: bool = False) -> None:
    if value is None and optional:
        return
    if value not in allowed:
        errors.append(f"{name} must be one of {', '.join(allowed)} (got {value!r})")


def _check_range(errors: List[str], name: str, value, bounds) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        errors.append(f"{name} must be an integer from {low} to {high} (got {value!r})")


def validate_shot_input(shot: ShotInput, game_type: str, is_break_shot: bool) -> List[str]:
    """
    Check a shot against the allowed values for the game it is logged in.

    Returns:
        List of problems, empty when the shot is valid
    """
    errors: List[str] = []

    _check_choice(errors, 'shot_type', shot.shot_type, taxonomy.SHOT_TYPES)
    _check_choice(errors, 'cut_angle', shot.cut_angle or None, taxonomy.CUT_ANGLES, optional=True)
    _check_choice(errors, 'distance', shot.distance, taxonomy.DISTANCES)
    _check_choice(errors, 'table_position', shot.table_position, taxonomy.TABLE_POSITIONS)
    _check_choice(errors, 'horizontal_spin', shot.horizontal_spin, taxonomy.HORIZONTAL_SPINS)
    _check_choice(errors, 'vertical_spin', shot.vertical_spin, taxonomy.VERTICAL_SPINS)
    _check_choice(errors, 'outcome', shot.outcome, taxonomy.OUTCOMES)
    _check_choice(errors, 'cue_ball_control', shot.cue_ball_control, taxonomy.CUE_BALL_CONTROLS)
    _check_choice(errors, 'error_type', shot.error_type, taxonomy.ERROR_TYPES)
    _check_choice(errors, 'strategic_intent', shot.strategic_intent or None,
                  taxonomy.STRATEGIC_INTENTS, optional=True)

    _check_range(errors, 'power_level', shot.power_level, taxonomy.POWER_RANGE)
    _check_range(errors, 'confidence_rating', shot.confidence_rating, taxonomy.CONFIDENCE_RANGE)

    if shot.ball_number is not None:
        highest = taxonomy.max_ball_number(game_type)
        if highest == 0:
            errors.append(f"ball_number is not tracked in {game_type}")
        else:
            _check_range(errors, 'ball_number', shot.ball_number, (1, highest))

    if is_break_shot:
        _check_range(errors, 'balls_pocketed_on_break', shot.balls_pocketed_on_break,
                     taxonomy.BREAK_BALLS_RANGE)
        _check_range(errors, 'break_spread_quality', shot.break_spread_quality,
                     taxonomy.SPREAD_QUALITY_RANGE)

    return errors


def build_shot(shot: ShotInput, game: Game, shot_number: int) -> Shot:
    """
    Turn logged input into the stored Shot for the game's current rack.

    Spin axes are collapsed into one category, and break-only fields are
    cleared unless this is a break shot. The first shot of a game counts
    as a break unless the input says otherwise.
    """
    is_break = shot.is_break_shot if shot.is_break_shot is not None else shot_number == 1

    return Shot(
        shot_id=str(uuid.uuid4()),
        game_id=game.game_id,
        player_id=game.player_a_id,
        shot_number=shot_number,
        rack=game.current_rack,
        shot_type=shot.shot_type,
        ball_number=shot.ball_number,
        cut_angle=shot.cut_angle or None,
        distance=shot.distance,
        table_position=shot.table_position,
        spin=taxonomy.compose_spin(shot.horizontal_spin, shot.vertical_spin, shot.spin_applied),
        power_level=shot.power_level,
        outcome=shot.outcome,
        cue_ball_control=shot.cue_ball_control,
        error_type=shot.error_type,
        confidence_rating=shot.confidence_rating,
        strategic_intent=shot.strategic_intent or None,
        notes=shot.notes or None,
        is_break_shot=is_break,
        balls_pocketed_on_break=shot.balls_pocketed_on_break if is_break else 0,
        break_spread_quality=shot.break_spread_quality if is_break else None,
    )


class ShotLogger(BaseService):
    """Records shots into a user's in-progress games."""

    def __init__(
        self,
        game_repository: GameRepository,
        shot_repository: ShotRepository,
        retry_strategy: Optional[RetryStrategy] = None,
    ):
        super().__init__(retry_strategy)
        self.games = game_repository
        self.shots = shot_repository

    def log_shot(self, user_id: str, game_id: str, shot: ShotInput) -> Result[Shot]:
        """
        Validate and store the next shot of a game.

        The shot number follows the shots already logged in the game.
        """
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            game = self._with_retry(lambda: self.games.get_for_user(game_id, user_id))
            if game is None:
                return Result.error(f"Game {game_id} not found")
            if game.is_complete:
                return Result.error("Game is already completed; shots can no longer be logged")

            shot_number = self._with_retry(lambda: self.shots.count_by_game(game_id)) + 1
            is_break = shot.is_break_shot if shot.is_break_shot is not None else shot_number == 1

            errors = validate_shot_input(shot, game.game_type, is_break)
            if errors:
                logger.debug("Rejected shot for game %s: %s", game_id, errors)
                return Result.error("Invalid shot: " + "; ".join(errors))

            record = build_shot(shot, game, shot_number)
            self._with_retry(lambda: self.shots.save(record))
        except sqlite3.Error as e:
            return self._storage_error("Error logging shot", e, "log_shot")

        logger.debug("Logged shot #%d (%s) in game %s", shot_number, record.outcome, game_id)
        return Result.success(record, f"Shot #{shot_number} recorded successfully.")
