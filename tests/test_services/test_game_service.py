"""Tests for the game lifecycle service (services/games.py)."""

import logging
import sqlite3

import pytest
from datetime import datetime
from unittest.mock import patch

from cuelog.services.games import GameService

USER_ID = 'user-1'
OTHER_USER_ID = 'user-2'


@pytest.fixture
def service(mock_game_repository, mock_player_repository, mock_shot_repository, no_retry):
    return GameService(
        game_repository=mock_game_repository,
        player_repository=mock_player_repository,
        shot_repository=mock_shot_repository,
        retry_strategy=no_retry,
    )


@pytest.fixture
def started(service):
    """A fresh 8-ball game owned by USER_ID."""
    return service.create_game(USER_ID, '8-ball').data


class TestCreateGame:
    def test_creates_in_progress_game(self, service, mock_game_repository):
        result = service.create_game(USER_ID, '9-ball')

        assert result.is_success
        assert result.message == '9-ball game created successfully.'
        game = result.data
        assert game.user_id == USER_ID
        assert (game.team_a_score, game.team_b_score, game.current_rack) == (0, 0, 1)
        assert game.completed_at is None
        assert mock_game_repository.exists(game.game_id)

    def test_single_mode_ignores_player_b(self, service, mock_player_repository):
        game = service.create_game(USER_ID, '8-ball', 'single', 'Alice', 'Bob').data

        assert game.player_a_name == 'Alice'
        assert game.player_b_id is None
        assert [p.name for p in mock_player_repository.get_by_user(USER_ID)] == ['Alice']

    def test_double_mode_creates_both_players(self, service, mock_player_repository):
        game = service.create_game(USER_ID, '10-ball', 'double', 'Alice', 'Bob').data

        assert game.players == 'Alice vs Bob'
        assert len(mock_player_repository.get_by_user(USER_ID)) == 2

    def test_blank_names_create_no_players(self, service, mock_player_repository):
        game = service.create_game(USER_ID, '8-ball', 'double', '  ', None).data
        assert game.player_a_id is None
        assert mock_player_repository.get_all() == []

    def test_requires_user(self, service):
        result = service.create_game(None, '8-ball')
        assert result.is_error
        assert 'Not signed in' in result.message

    def test_rejects_unknown_type_and_mode(self, service):
        assert service.create_game(USER_ID, 'snooker').is_error
        assert service.create_game(USER_ID, '8-ball', 'triple').is_error

    def test_storage_failure_is_error_result(self, service, mock_game_repository, monkeypatch):
        def broken_save(game):
            raise sqlite3.OperationalError("disk I/O error")
        monkeypatch.setattr(mock_game_repository, 'save', broken_save)

        result = service.create_game(USER_ID, '8-ball')
        assert result.is_error
        assert result.message == 'Error creating game: disk I/O error'


class TestRecordRack:
    def test_rack_won(self, service, started):
        result = service.record_rack(USER_ID, started.game_id, won=True)

        assert result.is_success
        assert (result.data.team_a_score, result.data.team_b_score, result.data.current_rack) == (1, 0, 2)
        assert result.message == 'Rack won! Score: 1 - 0. Starting rack #2'

    def test_rack_lost_persists(self, service, started, mock_game_repository):
        service.record_rack(USER_ID, started.game_id, won=True)
        result = service.record_rack(USER_ID, started.game_id, won=False)

        assert result.message == 'Rack lost Score: 1 - 1. Starting rack #3'
        stored = mock_game_repository.get_by_id(started.game_id)
        assert (stored.team_a_score, stored.team_b_score, stored.current_rack) == (1, 1, 3)

    def test_free_training_has_no_racks(self, service):
        training = service.create_game(USER_ID, 'free-training').data
        assert service.record_rack(USER_ID, training.game_id, won=True).is_error

    def test_completed_game_rejected(self, service, started):
        service.finish_game(USER_ID, started.game_id)
        result = service.record_rack(USER_ID, started.game_id, won=True)
        assert result.is_error
        assert 'already completed' in result.message

    def test_other_users_game_not_found(self, service, started):
        result = service.record_rack(OTHER_USER_ID, started.game_id, won=True)
        assert result.is_error
        assert result.message == f"Game {started.game_id} not found"


class TestFinishGame:
    def test_finish_game(self, service, started, mock_game_repository):
        result = service.finish_game(USER_ID, started.game_id)

        assert result.is_success
        assert result.message.startswith('Game completed!')
        assert isinstance(mock_game_repository.get_by_id(started.game_id).completed_at, datetime)

    def test_finish_training(self, service):
        training = service.create_game(USER_ID, 'free-training').data
        result = service.finish_game(USER_ID, training.game_id)
        assert result.message.startswith('Training completed!')

    def test_finishing_twice_is_skipped(self, service, started):
        service.finish_game(USER_ID, started.game_id)
        assert service.finish_game(USER_ID, started.game_id).is_skipped

    def test_unknown_game(self, service):
        assert service.finish_game(USER_ID, 'nope').is_error


class TestDeleteGame:
    def test_deletes_game_and_shots(self, service, started, mock_game_repository, mock_shot_repository, make_shot):
        mock_shot_repository.save(make_shot(game_id=started.game_id))
        mock_shot_repository.save(make_shot(game_id=started.game_id))

        result = service.delete_game(USER_ID, started.game_id)

        assert result.is_success
        assert not mock_game_repository.exists(started.game_id)
        assert mock_shot_repository.count_by_game(started.game_id) == 0

    def test_cannot_delete_other_users_game(self, service, started, mock_game_repository):
        assert service.delete_game(OTHER_USER_ID, started.game_id).is_error
        assert mock_game_repository.exists(started.game_id)


class TestQueries:
    def test_recent_games_newest_first_limited(self, service, mock_game_repository, make_game):
        for day in range(1, 8):
            mock_game_repository.save(make_game(game_id=f"g{day}", started_at=datetime(2025, 3, day)))
        mock_game_repository.save(make_game(game_id='other', user_id=OTHER_USER_ID))

        result = service.recent_games(USER_ID)
        assert [g.game_id for g in result.data] == ['g7', 'g6', 'g5', 'g4', 'g3']

    def test_game_detail(self, service, started, mock_shot_repository, make_shot):
        mock_shot_repository.save(make_shot(game_id=started.game_id, shot_number=2))
        mock_shot_repository.save(make_shot(game_id=started.game_id, shot_number=1))

        detail = service.game_detail(USER_ID, started.game_id).data
        assert detail.game.game_id == started.game_id
        assert [s.shot_number for s in detail.shots] == [1, 2]
        assert detail.next_shot_number == 3

    def test_game_detail_shot_failure(self, service, started, mock_shot_repository):
        mock_shot_repository.set_failure(sqlite3.OperationalError("disk I/O error"))
        result = service.game_detail(USER_ID, started.game_id)
        assert result.is_error
        assert result.message.startswith('Error loading game')


class TestStorageErrorReporting:
    def test_reported_once_and_logged_below_error(self, service, mock_shot_repository, started, caplog):
        error = sqlite3.OperationalError("disk I/O error")
        mock_shot_repository.set_failure(error)

        with patch("cuelog.services.base.capture_exception") as mock_capture:
            with caplog.at_level(logging.DEBUG):
                service.game_detail(USER_ID, started.game_id)

        mock_capture.assert_called_once_with(error, tags={"operation": "game_detail"})
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert any('Error loading game' in r.getMessage() for r in caplog.records)
