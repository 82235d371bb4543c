"""Leaderboard repository implementation"""

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from arcade_scores.domain.entities.leaderboard_entry import LeaderboardEntryEntity
from arcade_scores.domain.entities.pending_proof import PendingProofEntity
from arcade_scores.domain.interfaces.leaderboard_repository import LeaderboardRepositoryInterface
from arcade_scores.infrastructure.database.models import PendingToken, TopScore
from arcade_scores.infrastructure.repositories.base import SQLAlchemyRepository


class LeaderboardRepository(SQLAlchemyRepository, LeaderboardRepositoryInterface):
    """Async SQLAlchemy implementation of leaderboard repository"""

    async def get_top(self, limit: int) -> List[LeaderboardEntryEntity]:
        """Get the best entries, ties going to the earlier registration"""
        try:
            stmt = select(TopScore).order_by(TopScore.score.desc(), TopScore.id.asc()).limit(limit)
            result = await self.db.execute(stmt)
            rows = result.scalars().all()
        except SQLAlchemyError as exc:
            await self._fail("read the leaderboard", exc)

        return [self._to_entity(row) for row in rows]

    async def insert_and_trim(
        self,
        entry: LeaderboardEntryEntity,
        keep: int,
        proof: Optional[PendingProofEntity] = None,
    ) -> Optional[LeaderboardEntryEntity]:
        """Redeem the proof, insert the entry and prune the board in one transaction"""
        db_entry = TopScore(
            username=entry.username,
            score=entry.score,
            achieved_at=entry.achieved_at,
        )

        try:
            if proof is not None:
                # Must be the first write so concurrent redeemers queue on the lock
                redeem_stmt = (
                    delete(PendingToken)
                    .where(
                        PendingToken.id == proof.session_id,
                        PendingToken.token_hash == proof.token_hash,
                    )
                    .execution_options(synchronize_session=False)
                )
                redeemed = await self.db.execute(redeem_stmt)
                if redeemed.rowcount != 1:
                    await self.db.rollback()
                    return None

            self.db.add(db_entry)
            await self.db.flush()
            inserted = self._to_entity(db_entry)

            keep_ids = (
                select(TopScore.id)
                .order_by(TopScore.score.desc(), TopScore.id.asc())
                .limit(keep)
            )
            trim_stmt = (
                delete(TopScore)
                .where(TopScore.id.not_in(keep_ids))
                .execution_options(synchronize_session=False)
            )
            await self.db.execute(trim_stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("update the leaderboard", exc)

        return inserted

    def _to_entity(self, db_entry: TopScore) -> LeaderboardEntryEntity:
        """Convert database model to domain entity"""
        return LeaderboardEntryEntity(
            id=db_entry.id,
            username=db_entry.username,
            score=db_entry.score,
            achieved_at=db_entry.achieved_at,
        )
