"""Leaderboard repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from arcade_scores.domain.entities.leaderboard_entry import LeaderboardEntryEntity
from arcade_scores.domain.entities.pending_proof import PendingProofEntity


class LeaderboardRepositoryInterface(ABC):
    """Interface for the bounded top-score store"""

    @abstractmethod
    async def get_top(self, limit: int) -> List[LeaderboardEntryEntity]:
        """Get the best ``limit`` entries, highest score first"""
        pass

    @abstractmethod
    async def insert_and_trim(
        self,
        entry: LeaderboardEntryEntity,
        keep: int,
        proof: Optional[PendingProofEntity] = None,
    ) -> Optional[LeaderboardEntryEntity]:
        """Insert an entry and delete everything outside the best ``keep``

        Both steps form one transaction: either the insert and the trim are
        both visible, or neither is. When ``proof`` is given it is redeemed
        in the same transaction; if it is already gone nothing is written
        and None is returned.
        """
        pass
