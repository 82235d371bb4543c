"""Game session repository implementation"""

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from arcade_scores.domain.entities.game_session import GameSessionEntity
from arcade_scores.domain.interfaces.game_session_repository import GameSessionRepositoryInterface
from arcade_scores.infrastructure.database.models import ActiveGame
from arcade_scores.infrastructure.repositories.base import SQLAlchemyRepository


class GameSessionRepository(SQLAlchemyRepository, GameSessionRepositoryInterface):
    """Async SQLAlchemy implementation of game session repository"""

    async def create(self, session_entity: GameSessionEntity) -> GameSessionEntity:
        """Insert a new active session"""
        db_session = ActiveGame(
            id=session_entity.id,
            start_time=session_entity.start_time,
            created_at=session_entity.created_at,
        )

        try:
            self.db.add(db_session)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("create a game session", exc)

        return self._to_entity(db_session)

    async def consume(self, session_id: str) -> Optional[GameSessionEntity]:
        """Delete a session and return it, or None if someone else got there first"""
        try:
            stmt = select(ActiveGame).where(ActiveGame.id == session_id)
            result = await self.db.execute(stmt)
            db_session = result.scalar_one_or_none()
            if db_session is None:
                return None

            session_entity = self._to_entity(db_session)

            # The row count decides which of two concurrent callers wins
            delete_stmt = (
                delete(ActiveGame)
                .where(ActiveGame.id == session_id)
                .execution_options(synchronize_session=False)
            )
            deleted = await self.db.execute(delete_stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("consume a game session", exc)

        return session_entity if deleted.rowcount == 1 else None

    async def delete_created_before(self, cutoff_s: int) -> int:
        """Delete stale sessions"""
        try:
            stmt = (
                delete(ActiveGame)
                .where(ActiveGame.created_at < cutoff_s)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("delete stale game sessions", exc)

        return result.rowcount

    def _to_entity(self, db_session: ActiveGame) -> GameSessionEntity:
        """Convert database model to domain entity"""
        return GameSessionEntity(
            id=db_session.id,
            start_time=db_session.start_time,
            created_at=db_session.created_at,
        )
