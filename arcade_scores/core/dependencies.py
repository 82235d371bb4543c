"""FastAPI dependencies for the clock, settings and database"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from arcade_scores.application.use_cases.game_use_cases import (
    EndGameUseCase,
    GetLeaderboardUseCase,
    RegisterTopScoreUseCase,
    StartGameUseCase,
)
from arcade_scores.core.clock import Clock, system_clock
from arcade_scores.core.config import Settings, get_settings
from arcade_scores.infrastructure.database.connection import get_async_db
from arcade_scores.infrastructure.repositories.game_session_repository import GameSessionRepository
from arcade_scores.infrastructure.repositories.leaderboard_repository import LeaderboardRepository
from arcade_scores.infrastructure.repositories.pending_proof_repository import (
    PendingProofRepository,
)


def get_clock() -> Clock:
    """Time source for request handlers (overridden in tests)"""
    return system_clock


def get_start_game_use_case(
    db: AsyncSession = Depends(get_async_db),
    clock: Clock = Depends(get_clock),
) -> StartGameUseCase:
    return StartGameUseCase(GameSessionRepository(db), clock)


def get_end_game_use_case(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> EndGameUseCase:
    # All repositories of one request share its session
    return EndGameUseCase(
        GameSessionRepository(db),
        LeaderboardRepository(db),
        PendingProofRepository(db),
        settings,
        clock,
    )


def get_register_top_score_use_case(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> RegisterTopScoreUseCase:
    return RegisterTopScoreUseCase(
        LeaderboardRepository(db),
        PendingProofRepository(db),
        settings,
        clock,
    )


def get_leaderboard_use_case(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
) -> GetLeaderboardUseCase:
    return GetLeaderboardUseCase(LeaderboardRepository(db), settings)
