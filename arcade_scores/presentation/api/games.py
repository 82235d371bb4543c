"""Game session API endpoints"""

from fastapi import APIRouter, Depends

from arcade_scores.application.use_cases.game_use_cases import (
    EndGameUseCase,
    RegisterTopScoreUseCase,
    StartGameUseCase,
)
from arcade_scores.core.dependencies import (
    get_end_game_use_case,
    get_register_top_score_use_case,
    get_start_game_use_case,
)
from arcade_scores.presentation.schemas.common_schemas import ErrorResponse
from arcade_scores.presentation.schemas.game_schemas import (
    EndGameRequest,
    EndGameResponse,
    RegisterTopScoreRequest,
    RegisterTopScoreResponse,
    StartGameResponse,
)

router = APIRouter()


@router.post(
    "/start",
    response_model=StartGameResponse,
    summary="Start new game session",
    description="Open a game session; its id must be presented when the game ends.",
    responses={500: {"model": ErrorResponse}},
)
async def start_game(
    use_case: StartGameUseCase = Depends(get_start_game_use_case),
) -> StartGameResponse:
    """Start a new game session"""
    session = await use_case.execute()
    return StartGameResponse(game_id=session.id)


@router.post(
    "/end",
    response_model=EndGameResponse,
    response_model_exclude_none=True,
    summary="End game session",
    description=(
        "Submit the final score. A session can be ended once; a score that makes "
        "the top 3 receives a one-time token for name registration."
    ),
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def end_game(
    request: EndGameRequest,
    use_case: EndGameUseCase = Depends(get_end_game_use_case),
) -> EndGameResponse:
    """End a game session and check for a top-3 score"""
    result = await use_case.execute(request.game_id, request.score)

    if not result.qualifies:
        return EndGameResponse(
            is_top3=False,
            message="Score recorded, but it does not make the top 3",
        )

    return EndGameResponse(
        is_top3=True,
        token=result.token,
        expires_in=result.expires_in,
        message="Congratulations! You made the top 3. Register your name.",
    )


@router.post(
    "/register-top3",
    response_model=RegisterTopScoreResponse,
    summary="Register top-3 name",
    description="Exchange the token from a qualifying game for a leaderboard entry.",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        410: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def register_top3(
    request: RegisterTopScoreRequest,
    use_case: RegisterTopScoreUseCase = Depends(get_register_top_score_use_case),
) -> RegisterTopScoreResponse:
    """Register a player name for a qualifying score"""
    result = await use_case.execute(request.game_id, request.username, request.token)
    return RegisterTopScoreResponse(score=result.score)
