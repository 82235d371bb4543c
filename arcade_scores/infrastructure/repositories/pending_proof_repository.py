"""Pending proof repository implementation"""

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from arcade_scores.domain.entities.pending_proof import PendingProofEntity
from arcade_scores.domain.interfaces.pending_proof_repository import (
    PendingProofRepositoryInterface,
)
from arcade_scores.infrastructure.database.models import PendingToken
from arcade_scores.infrastructure.repositories.base import SQLAlchemyRepository


class PendingProofRepository(SQLAlchemyRepository, PendingProofRepositoryInterface):
    """Async SQLAlchemy implementation of pending proof repository"""

    async def create(self, proof: PendingProofEntity) -> PendingProofEntity:
        """Store a pending proof"""
        db_proof = PendingToken(
            id=proof.session_id,
            token_hash=proof.token_hash,
            score=proof.score,
            game_duration=proof.game_duration,
            expires_at=proof.expires_at,
        )

        try:
            self.db.add(db_proof)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("store a pending proof", exc)

        return self._to_entity(db_proof)

    async def find(self, session_id: str, token_hash: str) -> Optional[PendingProofEntity]:
        """Find a proof by session id and token digest together"""
        try:
            stmt = select(PendingToken).where(
                PendingToken.id == session_id,
                PendingToken.token_hash == token_hash,
            )
            result = await self.db.execute(stmt)
            db_proof = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            await self._fail("look up a pending proof", exc)

        return self._to_entity(db_proof) if db_proof else None

    async def delete(self, session_id: str) -> bool:
        """Delete the proof for a session"""
        try:
            stmt = (
                delete(PendingToken)
                .where(PendingToken.id == session_id)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("delete a pending proof", exc)

        return result.rowcount > 0

    async def delete_expired(self, now_ms: int) -> int:
        """Delete proofs whose window has closed"""
        try:
            stmt = (
                delete(PendingToken)
                .where(PendingToken.expires_at < now_ms)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("delete expired pending proofs", exc)

        return result.rowcount

    def _to_entity(self, db_proof: PendingToken) -> PendingProofEntity:
        """Convert database model to domain entity"""
        return PendingProofEntity(
            session_id=db_proof.id,
            token_hash=db_proof.token_hash,
            score=db_proof.score,
            game_duration=db_proof.game_duration,
            expires_at=db_proof.expires_at,
        )
