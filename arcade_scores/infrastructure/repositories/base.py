"""Shared plumbing for the SQLAlchemy repositories"""

import logging
from typing import NoReturn

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arcade_scores.domain.exceptions import StorageFailure

logger = logging.getLogger(__name__)


class SQLAlchemyRepository:
    """Base class holding the request-scoped session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fail(self, action: str, exc: SQLAlchemyError) -> NoReturn:
        """Roll back the current transaction and raise ``StorageFailure``"""
        logger.error(f"Storage error while trying to {action}", exc_info=exc)
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")
        raise StorageFailure() from exc
