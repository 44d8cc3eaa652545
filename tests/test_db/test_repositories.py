"""Tests for the SQLite repositories against a real temporary database."""

import sqlite3

import pytest
from datetime import datetime

from cuelog.db.game import SQLiteGameRepository
from cuelog.db.player import SQLitePlayerRepository
from cuelog.db.shot import SQLiteShotRepository
from cuelog.models.game import Player

USER_ID = 'user-1'
OTHER_USER_ID = 'user-2'


@pytest.fixture
def game_repo(test_db):
    return SQLiteGameRepository(test_db)


@pytest.fixture
def shot_repo(test_db):
    return SQLiteShotRepository(test_db)


@pytest.fixture
def player_repo(test_db):
    return SQLitePlayerRepository(test_db)


class TestInitDatabase:
    def test_creates_tables(self, test_db):
        conn = sqlite3.connect(test_db)
        try:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        finally:
            conn.close()
        assert {'players', 'games', 'shots'} <= tables

    def test_safe_to_run_twice(self, test_db):
        from cuelog.db.init_db import init_database
        init_database(test_db)

    def test_creates_missing_directory(self, tmp_path):
        from cuelog.db.init_db import init_database
        db_path = tmp_path / 'nested' / 'dir' / 'cuelog.db'
        init_database(str(db_path))
        assert db_path.exists()


class TestPlayerRepository:
    def test_save_and_get(self, player_repo):
        player_repo.save(Player(player_id='p1', name='Efren', user_id=USER_ID))

        player = player_repo.get_by_id('p1')
        assert player.name == 'Efren'
        assert player.created_at is not None
        assert player_repo.exists('p1')

    def test_get_by_user(self, player_repo):
        player_repo.save(Player(player_id='p1', name='Bob', user_id=USER_ID))
        player_repo.save(Player(player_id='p2', name='Ann', user_id=USER_ID))
        player_repo.save(Player(player_id='p3', name='Zed', user_id=OTHER_USER_ID))

        assert [p.name for p in player_repo.get_by_user(USER_ID)] == ['Ann', 'Bob']


class TestGameRepository:
    def test_round_trip_with_player_names(self, game_repo, player_repo, make_game):
        player_repo.save(Player(player_id='p1', name='Efren', user_id=USER_ID))
        game_repo.save(make_game(game_id='g1', player_a_id='p1'))

        game = game_repo.get_for_user('g1', USER_ID)
        assert game.player_a_name == 'Efren'
        assert game.started_at == datetime(2025, 3, 1, 18, 0)
        assert game.completed_at is None
        assert game.current_rack == 1

    def test_other_users_game_is_invisible(self, game_repo, make_game):
        game_repo.save(make_game(game_id='g1'))
        assert game_repo.get_for_user('g1', OTHER_USER_ID) is None
        assert game_repo.get_by_user(OTHER_USER_ID) == []

    def test_get_by_user_newest_first_with_limit(self, game_repo, make_game):
        for day in (1, 3, 2):
            game_repo.save(make_game(game_id=f"g{day}", started_at=datetime(2025, 3, day)))

        assert [g.game_id for g in game_repo.get_by_user(USER_ID)] == ['g3', 'g2', 'g1']
        assert [g.game_id for g in game_repo.get_by_user(USER_ID, limit=2)] == ['g3', 'g2']

    def test_update_progress_is_user_scoped(self, game_repo, make_game):
        game_repo.save(make_game(game_id='g1'))

        assert not game_repo.update_progress('g1', OTHER_USER_ID, 1, 0, 2)
        assert game_repo.update_progress('g1', USER_ID, 1, 0, 2)

        game = game_repo.get_by_id('g1')
        assert (game.team_a_score, game.team_b_score, game.current_rack) == (1, 0, 2)

    def test_mark_completed(self, game_repo, make_game):
        game_repo.save(make_game(game_id='g1'))
        finished = datetime(2025, 3, 1, 21, 30)

        assert game_repo.mark_completed('g1', USER_ID, finished)
        assert game_repo.get_by_id('g1').completed_at == finished

    def test_rejects_unknown_game_type(self, game_repo, make_game):
        with pytest.raises(sqlite3.IntegrityError):
            game_repo.save(make_game(game_type='snooker'))

    def test_delete_cascades_to_shots(self, game_repo, shot_repo, make_game, make_shot):
        game_repo.save(make_game(game_id='g1'))
        shot_repo.save(make_shot(game_id='g1', shot_number=1))
        shot_repo.save(make_shot(game_id='g1', shot_number=2))

        assert not game_repo.delete_for_user('g1', OTHER_USER_ID)
        assert shot_repo.count_by_game('g1') == 2

        assert game_repo.delete_for_user('g1', USER_ID)
        assert not game_repo.exists('g1')
        assert shot_repo.count_by_game('g1') == 0


class TestShotRepository:
    def test_round_trip(self, game_repo, shot_repo, make_game, make_shot):
        game_repo.save(make_game(game_id='g1'))
        shot_repo.save(make_shot(shot_id='s1', game_id='g1', shot_number=1, spin='top_left',
                                 is_break_shot=True, balls_pocketed_on_break=2, break_spread_quality=7))

        shot = shot_repo.get_by_id('s1')
        assert shot.spin == 'top_left'
        assert shot.is_break_shot is True
        assert shot.balls_pocketed_on_break == 2
        assert shot.created_at is not None

    def test_get_by_game_ordered_by_number(self, game_repo, shot_repo, make_game, make_shot):
        game_repo.save(make_game(game_id='g1'))
        for number in (3, 1, 2):
            shot_repo.save(make_shot(game_id='g1', shot_number=number))

        assert [s.shot_number for s in shot_repo.get_by_game('g1')] == [1, 2, 3]

    def test_get_by_game_ids(self, game_repo, shot_repo, make_game, make_shot):
        for game_id in ('g1', 'g2', 'g3'):
            game_repo.save(make_game(game_id=game_id))
        shot_repo.save(make_shot(game_id='g1', shot_number=1))
        shot_repo.save(make_shot(game_id='g2', shot_number=1))
        shot_repo.save(make_shot(game_id='g3', shot_number=1))

        shots = shot_repo.get_by_game_ids(['g1', 'g3'])
        assert sorted(s.game_id for s in shots) == ['g1', 'g3']
        assert shot_repo.get_by_game_ids([]) == []

    def test_get_by_game_ids_chunks_large_lists(self, game_repo, shot_repo, make_game, make_shot, monkeypatch):
        monkeypatch.setattr(SQLiteShotRepository, 'MAX_IDS_PER_QUERY', 2)
        for i in range(5):
            game_repo.save(make_game(game_id=f"g{i}"))
            shot_repo.save(make_shot(game_id=f"g{i}", shot_number=1))

        assert len(shot_repo.get_by_game_ids([f"g{i}" for i in range(5)])) == 5

    def test_duplicate_shot_number_rejected(self, game_repo, shot_repo, make_game, make_shot):
        game_repo.save(make_game(game_id='g1'))
        shot_repo.save(make_shot(game_id='g1', shot_number=1))

        with pytest.raises(sqlite3.IntegrityError):
            shot_repo.save(make_shot(game_id='g1', shot_number=1))

    def test_shot_requires_existing_game(self, shot_repo, make_shot):
        with pytest.raises(sqlite3.IntegrityError):
            shot_repo.save(make_shot(game_id='missing', shot_number=1))


class TestMockGameRepository:
    def test_stores_a_copy(self, mock_game_repository, make_game):
        game = make_game(game_id='g1', started_at=None)
        mock_game_repository.save(game)

        mock_game_repository.update_progress('g1', USER_ID, 2, 1, 4)
        mock_game_repository.mark_completed('g1', USER_ID, datetime(2025, 3, 1, 21, 0))

        assert game.started_at is None
        assert (game.team_a_score, game.team_b_score, game.current_rack) == (0, 0, 1)
        assert game.completed_at is None

        stored = mock_game_repository.get_by_id('g1')
        assert isinstance(stored.started_at, datetime)
        assert (stored.team_a_score, stored.team_b_score, stored.current_rack) == (2, 1, 4)
        assert stored.completed_at == datetime(2025, 3, 1, 21, 0)

    def test_updates_leave_earlier_reads_alone(self, mock_game_repository, make_game):
        mock_game_repository.save(make_game(game_id='g1'))
        before = mock_game_repository.get_for_user('g1', USER_ID)

        mock_game_repository.update_progress('g1', USER_ID, 1, 0, 2)

        assert before.team_a_score == 0
        assert mock_game_repository.get_for_user('g1', USER_ID).team_a_score == 1
