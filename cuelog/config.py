from dataclasses import dataclass
from typing import Optional
import os

DEFAULT_DB_PATH = 'data/cuelog.db'


def get_db_path() -> str:
    """Database file to use: ``$CUELOG_DB_PATH`` when set, else ``data/cuelog.db``."""
    return os.getenv('CUELOG_DB_PATH', DEFAULT_DB_PATH)


@dataclass
class StorageConfig:
    timeout: float = 5.0       # sqlite busy timeout, seconds
    max_retries: int = 3       # attempts on a locked database
    retry_delay: float = 0.2

@dataclass
class Config:
    db_path: str = DEFAULT_DB_PATH
    user_id: Optional[str] = None
    storage: StorageConfig = None

    def __post_init__(self):
        if self.storage is None:
            self.storage = StorageConfig()

    @classmethod
    def from_env(cls) -> 'Config':
        return cls(
            db_path = get_db_path(),
            user_id = os.getenv('CUELOG_USER_ID'),
            storage=StorageConfig(
                timeout = float(os.getenv('CUELOG_DB_TIMEOUT', 5.0)),
                max_retries = int(os.getenv('CUELOG_DB_RETRIES', 3)),
                retry_delay = float(os.getenv('CUELOG_DB_RETRY_DELAY', 0.2)),
            )
        )
