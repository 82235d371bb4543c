"""Pending proof repository interface"""

from abc import ABC, abstractmethod
from typing import Optional

from arcade_scores.domain.entities.pending_proof import PendingProofEntity


class PendingProofRepositoryInterface(ABC):
    """Interface for proofs awaiting leaderboard registration"""

    @abstractmethod
    async def create(self, proof: PendingProofEntity) -> PendingProofEntity:
        """Store a pending proof keyed by its session id"""
        pass

    @abstractmethod
    async def find(self, session_id: str, token_hash: str) -> Optional[PendingProofEntity]:
        """Find a proof matching both the session id and the token digest

        A single lookup on the pair; a right id with a wrong digest misses
        exactly like an unknown id.
        """
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete the proof for a session; return whether a row was removed"""
        pass

    @abstractmethod
    async def delete_expired(self, now_ms: int) -> int:
        """Delete proofs with ``expires_at < now_ms``; return the count"""
        pass
