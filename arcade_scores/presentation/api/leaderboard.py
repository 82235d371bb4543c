"""Leaderboard API endpoints"""

from fastapi import APIRouter, Depends

from arcade_scores.application.use_cases.game_use_cases import GetLeaderboardUseCase
from arcade_scores.core.clock import Clock
from arcade_scores.core.dependencies import get_clock, get_leaderboard_use_case
from arcade_scores.presentation.schemas.common_schemas import ErrorResponse
from arcade_scores.presentation.schemas.game_schemas import LeaderboardEntry, LeaderboardResponse

router = APIRouter()


@router.get(
    "",
    response_model=LeaderboardResponse,
    summary="Get leaderboard",
    description="Get the top 3 scores, highest first",
    responses={500: {"model": ErrorResponse}},
)
async def get_leaderboard(
    use_case: GetLeaderboardUseCase = Depends(get_leaderboard_use_case),
    clock: Clock = Depends(get_clock),
) -> LeaderboardResponse:
    """Get leaderboard with top scores"""
    entries = await use_case.execute()

    return LeaderboardResponse(
        leaderboard=[LeaderboardEntry.model_validate(entry) for entry in entries],
        timestamp=clock.isoformat(),
    )
