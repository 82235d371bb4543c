"""Game session repository interface"""

from abc import ABC, abstractmethod
from typing import Optional

from arcade_scores.domain.entities.game_session import GameSessionEntity


class GameSessionRepositoryInterface(ABC):
    """Interface for the active game session store

    Implementations raise ``StorageFailure`` when the store cannot complete
    an operation.
    """

    @abstractmethod
    async def create(self, session: GameSessionEntity) -> GameSessionEntity:
        """Insert a new active session"""
        pass

    @abstractmethod
    async def consume(self, session_id: str) -> Optional[GameSessionEntity]:
        """Delete a session and return it

        Returns None when the session does not exist or another caller
        deleted it first, so at most one caller ever receives a given session.
        """
        pass

    @abstractmethod
    async def delete_created_before(self, cutoff_s: int) -> int:
        """Delete sessions created before ``cutoff_s``; return the count"""
        pass
