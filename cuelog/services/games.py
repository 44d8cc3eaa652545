"""Game Service - Creating games, recording racks, finishing and deleting games."""

import logging
import sqlite3
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional

from .base import BaseService, Result
from ..db.game import GameRepository
from ..db.player import PlayerRepository
from ..db.shot import ShotRepository
from ..db.retry import RetryStrategy
from ..helpers.shot_taxonomy import GAME_TYPES, PLAYER_MODES
from ..models.game import Game, Player
from ..models.shot import Shot

logger = logging.getLogger(__name__)

RECENT_GAMES_LIMIT = 5


@dataclass
class GameDetail:
    """A game together with its shots in logging order."""
    game: Game
    shots: List[Shot]

    @property
    def next_shot_number(self) -> int:
        return len(self.shots) + 1


class GameService(BaseService):
    """Game lifecycle for one user at a time; the user id is passed to every call."""

    def __init__(
        self,
        game_repository: GameRepository,
        player_repository: PlayerRepository,
        shot_repository: ShotRepository,
        retry_strategy: Optional[RetryStrategy] = None,
    ):
        super().__init__(retry_strategy)
        self.games = game_repository
        self.players = player_repository
        self.shots = shot_repository

    def _new_player(self, user_id: str, name: str) -> Player:
        player = Player(player_id=str(uuid.uuid4()), name=name.strip(), user_id=user_id)
        self._with_retry(lambda: self.players.save(player))
        return player

    def create_game(
        self,
        user_id: str,
        game_type: str,
        player_mode: str = 'single',
        player_a_name: Optional[str] = None,
        player_b_name: Optional[str] = None,
    ) -> Result[Game]:
        """
        Start a new game, creating its players first.

        Player B is only created in double mode, and only when named.
        """
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)
        if game_type not in GAME_TYPES:
            return Result.error(f"Unknown game type '{game_type}' (expected one of {', '.join(GAME_TYPES)})")
        if player_mode not in PLAYER_MODES:
            return Result.error(f"Unknown player mode '{player_mode}' (expected single or double)")

        try:
            player_a = self._new_player(user_id, player_a_name) if player_a_name and player_a_name.strip() else None
            player_b = None
            if player_mode == 'double' and player_b_name and player_b_name.strip():
                player_b = self._new_player(user_id, player_b_name)

            game = Game(
                game_id=str(uuid.uuid4()),
                user_id=user_id,
                game_type=game_type,
                player_mode=player_mode,
                player_a_id=player_a.player_id if player_a else None,
                player_b_id=player_b.player_id if player_b else None,
                started_at=datetime.now(),
                player_a_name=player_a.name if player_a else None,
                player_b_name=player_b.name if player_b else None,
            )
            self._with_retry(lambda: self.games.save(game))
        except sqlite3.Error as e:
            return self._storage_error("Error creating game", e, "create_game")

        logger.info("Started %s game %s", game_type, game.game_id)
        return Result.success(game, f"{game_type} game created successfully.")

    def _load_owned(self, user_id: str, game_id: str) -> Optional[Game]:
        return self._with_retry(lambda: self.games.get_for_user(game_id, user_id))

    def record_rack(self, user_id: str, game_id: str, won: bool) -> Result[Game]:
        """Close the current rack: one point to the winner, rack counter +1."""
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            game = self._load_owned(user_id, game_id)
            if game is None:
                return Result.error(f"Game {game_id} not found")
            if game.is_training:
                return Result.error("Free training sessions have no racks; finish the training instead")
            if game.is_complete:
                return Result.error("Game is already completed")

            team_a_score = game.team_a_score + 1 if won else game.team_a_score
            team_b_score = game.team_b_score if won else game.team_b_score + 1
            current_rack = game.current_rack + 1

            updated = self._with_retry(lambda: self.games.update_progress(
                game_id, user_id, team_a_score, team_b_score, current_rack))
        except sqlite3.Error as e:
            return self._storage_error("Error finishing rack", e, "record_rack")

        if not updated:
            return Result.error(f"Game {game_id} not found")

        game = replace(game, team_a_score=team_a_score, team_b_score=team_b_score, current_rack=current_rack)
        title = "Rack won!" if won else "Rack lost"
        return Result.success(
            game,
            f"{title} Score: {team_a_score} - {team_b_score}. Starting rack #{current_rack}",
        )

    def finish_game(self, user_id: str, game_id: str) -> Result[Game]:
        """Mark a game (or free training session) as completed now."""
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            game = self._load_owned(user_id, game_id)
            if game is None:
                return Result.error(f"Game {game_id} not found")
            if game.is_complete:
                return Result.skipped("Game is already completed")

            completed_at = datetime.now()
            updated = self._with_retry(lambda: self.games.mark_completed(game_id, user_id, completed_at))
        except sqlite3.Error as e:
            return self._storage_error("Error finishing game", e, "finish_game")

        if not updated:
            return Result.error(f"Game {game_id} not found")

        game = replace(game, completed_at=completed_at)
        if game.is_training:
            return Result.success(game, "Training completed! Your training session has been saved.")
        return Result.success(game, "Game completed! Your game has been saved to history.")

    def delete_game(self, user_id: str, game_id: str) -> Result[bool]:
        """Delete a game and every shot logged in it."""
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            deleted = self._with_retry(lambda: self.games.delete_for_user(game_id, user_id))
        except sqlite3.Error as e:
            return self._storage_error("Error deleting game", e, "delete_game")

        if not deleted:
            return Result.error(f"Game {game_id} not found")

        logger.info("Deleted game %s", game_id)
        return Result.success(True, "Game deleted. The game has been removed from your history.")

    def recent_games(self, user_id: str, limit: int = RECENT_GAMES_LIMIT) -> Result[List[Game]]:
        """Most recently started games of the user."""
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            games = self._with_retry(lambda: self.games.get_by_user(user_id, limit=limit))
        except sqlite3.Error as e:
            return self._storage_error("Error loading games", e, "recent_games")

        return Result.success(games)

    def game_detail(self, user_id: str, game_id: str) -> Result[GameDetail]:
        """A game with its shots ordered by shot number."""
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            game = self._load_owned(user_id, game_id)
            if game is None:
                return Result.error(f"Game {game_id} not found")
            shots = self._with_retry(lambda: self.shots.get_by_game(game_id))
        except sqlite3.Error as e:
            return self._storage_error("Error loading game", e, "game_detail")

        return Result.success(GameDetail(game=game, shots=shots))
