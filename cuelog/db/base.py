import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List, TypeVar, Generic

T = TypeVar('T')


def connect(db_path: str, timeout: float = 5.0) -> sqlite3.Connection:
    """Open a connection with dict-style rows and foreign keys enforced."""
    conn = sqlite3.connect(db_path, timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def to_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def from_timestamp(value) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class BaseRepository(ABC, Generic[T]):
    """Abstract base for all repositories."""

    @abstractmethod
    def get_by_id(self, entity_id: str) -> Optional[T]:
        """Retrieve a single entity by ID"""

    @abstractmethod
    def get_all(self) -> List[T]:
        """Retrieve all entities."""
        pass

    @abstractmethod
    def save(self, entity: T) -> None:
        """Save an entity."""
        pass

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Delete an entity. Returns True if deleted."""
        pass

    @abstractmethod
    def exists(self, entity_id: str) -> bool:
        """Check if entity exists."""
        pass
