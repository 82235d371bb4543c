"""Housekeeping use cases"""

import logging
from dataclasses import dataclass

from arcade_scores.core.clock import Clock
from arcade_scores.core.config import Settings
from arcade_scores.domain.interfaces.game_session_repository import GameSessionRepositoryInterface
from arcade_scores.domain.interfaces.pending_proof_repository import (
    PendingProofRepositoryInterface,
)

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Rows removed by one sweep"""

    expired_proofs: int
    stale_sessions: int


class SweepExpiredDataUseCase:
    """Use case for removing expired proofs and abandoned sessions (background task)

    The leaderboard is never touched. Expired rows are also rejected when
    used, so a missed sweep only delays cleanup.
    """

    def __init__(
        self,
        game_repository: GameSessionRepositoryInterface,
        proof_repository: PendingProofRepositoryInterface,
        settings: Settings,
        clock: Clock,
    ):
        self.game_repository = game_repository
        self.proof_repository = proof_repository
        self.settings = settings
        self.clock = clock

    async def execute(self) -> SweepResult:
        """Delete expired proofs and sessions older than the retention window"""
        now_ms = self.clock.now_ms()
        expired_proofs = await self.proof_repository.delete_expired(now_ms)

        cutoff_s = now_ms // 1000 - self.settings.session_retention
        stale_sessions = await self.game_repository.delete_created_before(cutoff_s)

        result = SweepResult(expired_proofs=expired_proofs, stale_sessions=stale_sessions)
        logger.info(
            f"Sweep removed {result.expired_proofs} expired proofs "
            f"and {result.stale_sessions} stale sessions"
        )
        return result
