"""Arcade Scores - FastAPI Game Application

Issues game sessions, checks score submissions against session timing and
keeps a token-gated top-3 leaderboard.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from arcade_scores.core.clock import Clock, system_clock
from arcade_scores.core.config import settings
from arcade_scores.core.dependencies import get_clock
from arcade_scores.domain.exceptions import GameError, InvalidRequest
from arcade_scores.infrastructure.database.connection import (
    AsyncSessionLocal,
    create_tables,
    dispose_engine,
)
from arcade_scores.infrastructure.services.cleanup_scheduler import CleanupScheduler
from arcade_scores.presentation.api.games import router as games_router
from arcade_scores.presentation.api.leaderboard import router as leaderboard_router
from arcade_scores.presentation.schemas.common_schemas import (
    ErrorResponse,
    HealthCheckResponse,
    RootResponse,
)

logger = logging.getLogger("arcade_scores")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the schema, run the sweep while serving, clean up on shutdown"""
    await create_tables()
    logger.info(f"Database ready: {settings.database_url}")

    scheduler = CleanupScheduler(AsyncSessionLocal, settings, system_clock)
    app.state.cleanup_scheduler = scheduler
    scheduler.start()

    yield

    logger.info("Shutting down...")
    await scheduler.stop()
    await dispose_engine()


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    """Render an ErrorResponse"""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    """Map domain errors to their HTTP status"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}")
    return error_response(
        exc.status_code,
        ErrorResponse(message=exc.message, error_code=exc.error_code, details=exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed bodies with 400 instead of 422"""
    logger.warning(f"Invalid request to {request.url.path}: {len(exc.errors())} error(s)")
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return error_response(
        InvalidRequest.status_code,
        ErrorResponse(
            message=InvalidRequest.default_message,
            error_code=InvalidRequest.error_code,
            details=errors,
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, expose nothing"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        500,
        ErrorResponse(message="Internal server error", error_code="INTERNAL_ERROR"),
    )


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),  # Console output
        ],
    )

    # Set specific loggers
    logging.getLogger("arcade_scores").setLevel(logging.INFO)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    app = FastAPI(
        title=settings.app_name,
        description="Game sessions with timing checks and a token-gated top-3 leaderboard",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GameError, game_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(games_router, prefix="/api/game", tags=["Game Sessions"])
    app.include_router(leaderboard_router, prefix="/api/leaderboard", tags=["Leaderboard"])

    return app


# Create FastAPI app
app = create_application()


@app.get("/", response_model=RootResponse)
async def root() -> RootResponse:
    """Root endpoint"""
    return RootResponse(
        message=f"{settings.app_name} API",
        version=settings.version,
        docs="/docs",
    )


@app.get("/api/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check(clock: Clock = Depends(get_clock)) -> HealthCheckResponse:
    """Health check endpoint"""
    return HealthCheckResponse(
        status="OK",
        timestamp=clock.isoformat(),
        version=settings.version,
    )


def start() -> None:
    """Start the server"""
    uvicorn.run(
        "arcade_scores.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    start()
