"""Shared pytest fixtures for cuelog tests."""

import pytest
from datetime import datetime


USER_ID = 'user-1'
OTHER_USER_ID = 'user-2'


@pytest.fixture
def test_db(tmp_path):
    """
    Create a test database with all tables initialized.

    Uses tmp_path fixture to ensure isolation between tests.
    """
    db_path = str(tmp_path / "test.db")
    from cuelog.db.init_db import init_database
    init_database(db_path)
    return db_path


@pytest.fixture
def mock_shot_repository():
    """Create a mock shot repository."""
    from cuelog.db.shot import MockShotRepository
    return MockShotRepository()


@pytest.fixture
def mock_game_repository(mock_shot_repository):
    """Create a mock game repository that cascades deletes to the mock shots."""
    from cuelog.db.game import MockGameRepository
    repository = MockGameRepository()
    repository.shot_repository = mock_shot_repository
    return repository


@pytest.fixture
def mock_player_repository():
    """Create a mock player repository."""
    from cuelog.db.player import MockPlayerRepository
    return MockPlayerRepository()


@pytest.fixture
def no_retry():
    """Retry strategy that tries once and never sleeps."""
    from cuelog.db.retry import RetryStrategy
    return RetryStrategy(max_retries=1, base_delay=0)


@pytest.fixture
def make_game():
    """Factory for Game models with sensible defaults."""
    from cuelog.models.game import Game

    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        values = {
            'game_id': f"game-{counter['n']}",
            'user_id': USER_ID,
            'game_type': '8-ball',
            'player_mode': 'single',
            'started_at': datetime(2025, 3, 1, 18, 0),
        }
        values.update(overrides)
        return Game(**values)

    return _make


@pytest.fixture
def make_shot():
    """Factory for Shot models with sensible defaults."""
    from cuelog.models.shot import Shot

    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        values = {
            'shot_id': f"shot-{counter['n']}",
            'game_id': 'game-1',
            'shot_number': counter['n'],
            'rack': 1,
            'shot_type': 'attack',
            'distance': 'short',
            'table_position': 'open',
            'spin': 'none',
            'power_level': 3,
            'outcome': 'pocketed',
            'cue_ball_control': 'on_target',
            'error_type': 'none',
            'confidence_rating': 8,
        }
        values.update(overrides)
        return Shot(**values)

    return _make


@pytest.fixture
def sample_games(make_game):
    """Two completed 8-ball games: one won 5-3, one lost 2-4."""
    return [
        make_game(game_id='g-won', team_a_score=5, team_b_score=3,
                  completed_at=datetime(2025, 3, 1, 20, 0)),
        make_game(game_id='g-lost', team_a_score=2, team_b_score=4,
                  completed_at=datetime(2025, 3, 2, 20, 0)),
    ]


@pytest.fixture
def sample_shots(make_shot):
    """Ten shots across the sample games: six pocketed, four missed."""
    shots = [make_shot(game_id='g-won', outcome='pocketed') for _ in range(6)]
    shots += [make_shot(game_id='g-lost', outcome='miss') for _ in range(4)]
    return shots
