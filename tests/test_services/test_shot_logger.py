"""Tests for shot validation and logging (services/shots.py)."""

import sqlite3

import pytest
from datetime import datetime

from cuelog.models.shot import ShotInput
from cuelog.services.shots import ShotLogger, build_shot, validate_shot_input

USER_ID = 'user-1'


@pytest.fixture
def logger_service(mock_game_repository, mock_shot_repository, no_retry):
    return ShotLogger(
        game_repository=mock_game_repository,
        shot_repository=mock_shot_repository,
        retry_strategy=no_retry,
    )


@pytest.fixture
def game(mock_game_repository, make_game):
    g = make_game(game_id='g1', player_a_id='p1', current_rack=2)
    mock_game_repository.save(g)
    return g


# validate_shot_input

class TestValidateShotInput:
    def test_defaults_are_valid(self):
        assert validate_shot_input(ShotInput(), '8-ball', is_break_shot=True) == []

    def test_bad_choices_reported(self):
        errors = validate_shot_input(
            ShotInput(shot_type='jump', distance='medium', outcome='great'),
            '8-ball', is_break_shot=False,
        )
        assert len(errors) == 3
        assert any(e.startswith('shot_type') for e in errors)

    @pytest.mark.parametrize("field, value", [
        ('power_level', 0),
        ('power_level', 6),
        ('confidence_rating', 11),
        ('confidence_rating', True),
    ])
    def test_ranges(self, field, value):
        errors = validate_shot_input(ShotInput(**{field: value}), '8-ball', is_break_shot=False)
        assert len(errors) == 1
        assert errors[0].startswith(field)

    def test_ball_number_bounded_by_game_type(self):
        assert validate_shot_input(ShotInput(ball_number=9), '9-ball', False) == []
        assert validate_shot_input(ShotInput(ball_number=10), '9-ball', False)
        assert validate_shot_input(ShotInput(ball_number=15), '8-ball', False) == []

    def test_free_training_has_no_ball_numbers(self):
        errors = validate_shot_input(ShotInput(ball_number=1), 'free-training', False)
        assert errors == ['ball_number is not tracked in free-training']

    def test_break_fields_only_checked_on_break(self):
        shot = ShotInput(balls_pocketed_on_break=20, break_spread_quality=0)
        assert validate_shot_input(shot, '8-ball', is_break_shot=False) == []
        assert len(validate_shot_input(shot, '8-ball', is_break_shot=True)) == 2

    def test_optional_fields(self):
        assert validate_shot_input(ShotInput(cut_angle='', strategic_intent=''), '8-ball', False) == []
        assert validate_shot_input(ShotInput(cut_angle='9/8'), '8-ball', False)


# build_shot

class TestBuildShot:
    def test_fills_game_context_and_spin(self, game):
        shot = build_shot(
            ShotInput(spin_applied=True, horizontal_spin='right', vertical_spin='bottom'),
            game, shot_number=4,
        )
        assert shot.game_id == 'g1'
        assert shot.player_id == 'p1'
        assert shot.rack == 2
        assert shot.shot_number == 4
        assert shot.spin == 'bottom_right'

    def test_spin_not_applied(self, game):
        shot = build_shot(ShotInput(spin_applied=False, horizontal_spin='left'), game, 2)
        assert shot.spin == 'none'

    def test_first_shot_is_break_by_default(self, game):
        shot = build_shot(ShotInput(balls_pocketed_on_break=3, break_spread_quality=8), game, 1)
        assert shot.is_break_shot
        assert (shot.balls_pocketed_on_break, shot.break_spread_quality) == (3, 8)

    def test_break_fields_cleared_otherwise(self, game):
        shot = build_shot(ShotInput(balls_pocketed_on_break=3, break_spread_quality=8), game, 2)
        assert not shot.is_break_shot
        assert shot.balls_pocketed_on_break == 0
        assert shot.break_spread_quality is None

    def test_explicit_break_flag_wins(self, game):
        assert not build_shot(ShotInput(is_break_shot=False), game, 1).is_break_shot
        assert build_shot(ShotInput(is_break_shot=True), game, 5).is_break_shot

    def test_blank_strings_stored_as_none(self, game):
        shot = build_shot(ShotInput(cut_angle='', notes='', strategic_intent=''), game, 2)
        assert (shot.cut_angle, shot.notes, shot.strategic_intent) == (None, None, None)


# ShotLogger.log_shot

class TestLogShot:
    def test_numbers_follow_existing_shots(self, logger_service, game, mock_shot_repository):
        first = logger_service.log_shot(USER_ID, 'g1', ShotInput())
        second = logger_service.log_shot(USER_ID, 'g1', ShotInput(outcome='miss'))

        assert first.message == 'Shot #1 recorded successfully.'
        assert second.data.shot_number == 2
        assert first.data.is_break_shot and not second.data.is_break_shot
        assert mock_shot_repository.count_by_game('g1') == 2

    def test_invalid_shot_not_stored(self, logger_service, game, mock_shot_repository):
        result = logger_service.log_shot(USER_ID, 'g1', ShotInput(power_level=9))

        assert result.is_error
        assert result.message.startswith('Invalid shot: power_level')
        assert mock_shot_repository.count_by_game('g1') == 0

    def test_completed_game_rejected(self, logger_service, game, mock_game_repository):
        mock_game_repository.mark_completed('g1', USER_ID, datetime(2025, 3, 1, 21, 0))
        assert logger_service.log_shot(USER_ID, 'g1', ShotInput()).is_error

    def test_other_users_game(self, logger_service, game):
        result = logger_service.log_shot('user-2', 'g1', ShotInput())
        assert result.message == 'Game g1 not found'

    def test_requires_user(self, logger_service, game):
        assert logger_service.log_shot('', 'g1', ShotInput()).is_error

    def test_storage_failure(self, logger_service, game, mock_shot_repository):
        mock_shot_repository.set_failure(sqlite3.OperationalError("database is locked"))
        result = logger_service.log_shot(USER_ID, 'g1', ShotInput())
        assert result.is_error
        assert result.message == 'Error logging shot: database is locked'
