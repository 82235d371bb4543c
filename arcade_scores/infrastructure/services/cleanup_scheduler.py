"""Background task that periodically sweeps expired data"""

import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from arcade_scores.application.use_cases.cleanup_use_cases import (
    SweepExpiredDataUseCase,
    SweepResult,
)
from arcade_scores.core.clock import Clock
from arcade_scores.core.config import Settings
from arcade_scores.infrastructure.repositories.game_session_repository import GameSessionRepository
from arcade_scores.infrastructure.repositories.pending_proof_repository import (
    PendingProofRepository,
)

logger = logging.getLogger(__name__)


class CleanupScheduler:
    """Runs the sweep on a fixed interval, independent of request handling"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
        clock: Clock,
    ) -> None:
        self.session_factory = session_factory
        self.settings = settings
        self.clock = clock
        self._task: Optional[asyncio.Task] = None
        self._stopping = asyncio.Event()

    @property
    def is_running(self) -> bool:
        """Check if the background task is alive"""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background task"""
        if self.is_running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self._run(), name="cleanup-scheduler")
        logger.info(f"Cleanup scheduler started (every {self.settings.cleanup_interval}ms)")

    async def stop(self) -> None:
        """Stop the background task, letting a sweep in progress finish"""
        if self._task is None:
            return

        self._stopping.set()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Cleanup scheduler stopped")

    async def run_once(self) -> SweepResult:
        """Run a single sweep in its own database session"""
        async with self.session_factory() as db:
            sweep = SweepExpiredDataUseCase(
                GameSessionRepository(db),
                PendingProofRepository(db),
                self.settings,
                self.clock,
            )
            return await sweep.execute()

    async def _run(self) -> None:
        interval_s = self.settings.cleanup_interval / 1000
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=interval_s)
                break
            except asyncio.TimeoutError:
                pass

            try:
                await self.run_once()
            except Exception:
                # Retried on the next tick
                logger.exception("Sweep failed")
