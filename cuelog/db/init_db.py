"""
Cuelog Database Initialization

Creates all tables the practice log needs. Safe to run repeatedly.

Usage:
    cuelog init-db
"""

import logging
import os
import sqlite3

logger = logging.getLogger(__name__)


def init_database(db_path: str = None) -> None:
    """
    Create all database tables for the practice log.

    Tables created:
        - players: Named players, owned by a user
        - games: Games/matches with scores, rack counter and completion time
        - shots: Per-shot log, deleted together with their game

    Args:
        db_path: Path to the SQLite database file
    """
    from cuelog.config import get_db_path
    if db_path is None:
        db_path = get_db_path()

    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    # =========================================================================
    # PLAYERS TABLE
    # =========================================================================
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS players (
            player_id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            user_id TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # =========================================================================
    # GAMES TABLE
    # =========================================================================
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS games (
            game_id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            game_type TEXT NOT NULL
                CHECK (game_type IN ('8-ball', '9-ball', '10-ball', 'free-training')),
            player_mode TEXT NOT NULL
                CHECK (player_mode IN ('single', 'double')),
            player_a_id TEXT,
            player_b_id TEXT,
            team_a_score INTEGER DEFAULT 0,
            team_b_score INTEGER DEFAULT 0,
            current_rack INTEGER DEFAULT 1,
            started_at TIMESTAMP NOT NULL,
            completed_at TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,

            FOREIGN KEY (player_a_id) REFERENCES players(player_id),
            FOREIGN KEY (player_b_id) REFERENCES players(player_id)
        )
    ''')

    cursor.execute('''
        CREATE INDEX IF NOT EXISTS idx_games_user_started
        ON games(user_id, started_at)
    ''')

    # =========================================================================
    # SHOTS TABLE (insert only; removed with their game)
    # =========================================================================
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS shots (
            shot_id TEXT PRIMARY KEY,
            game_id TEXT NOT NULL,
            player_id TEXT,
            shot_number INTEGER NOT NULL,
            rack INTEGER NOT NULL,

            -- Plan & setup
            shot_type TEXT,
            ball_number INTEGER,
            cut_angle TEXT,
            distance TEXT,
            table_position TEXT,

            -- Execution
            spin TEXT,
            power_level INTEGER,

            -- Result
            outcome TEXT,
            cue_ball_control TEXT,
            error_type TEXT,
            confidence_rating INTEGER,
            strategic_intent TEXT,
            notes TEXT,

            -- Break shot
            is_break_shot INTEGER DEFAULT 0,
            balls_pocketed_on_break INTEGER,
            break_spread_quality INTEGER,

            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,

            UNIQUE (game_id, shot_number),
            FOREIGN KEY (game_id) REFERENCES games(game_id) ON DELETE CASCADE,
            FOREIGN KEY (player_id) REFERENCES players(player_id)
        )
    ''')

    conn.commit()
    conn.close()

    logger.debug("Database initialized at %s", db_path)


if __name__ == '__main__':
    init_database()
