"""Game session use cases"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from arcade_scores.core.clock import Clock
from arcade_scores.core.config import Settings
from arcade_scores.core.security import generate_proof_token, generate_session_id, hash_token
from arcade_scores.domain.entities.game_session import GameSessionEntity
from arcade_scores.domain.entities.leaderboard_entry import LeaderboardEntryEntity
from arcade_scores.domain.entities.pending_proof import PendingProofEntity
from arcade_scores.domain.exceptions import (
    InvalidDuration,
    InvalidRequest,
    ProofExpired,
    ProofNotFound,
    SessionNotFound,
)
from arcade_scores.domain.interfaces.game_session_repository import GameSessionRepositoryInterface
from arcade_scores.domain.interfaces.leaderboard_repository import LeaderboardRepositoryInterface
from arcade_scores.domain.interfaces.pending_proof_repository import (
    PendingProofRepositoryInterface,
)
from arcade_scores.domain.value_objects.duration import Duration
from arcade_scores.domain.value_objects.score import Score

logger = logging.getLogger(__name__)


@dataclass
class EndGameResult:
    """Outcome of a successfully ended session"""

    qualifies: bool
    token: Optional[str] = None
    expires_in: Optional[int] = None


@dataclass
class RegisterResult:
    """Outcome of a successful leaderboard registration"""

    username: str
    score: int


class StartGameUseCase:
    """Use case for starting a game session"""

    def __init__(self, game_repository: GameSessionRepositoryInterface, clock: Clock):
        self.game_repository = game_repository
        self.clock = clock

    async def execute(self) -> GameSessionEntity:
        """Create and store a new active session"""
        now_ms = self.clock.now_ms()
        session_entity = GameSessionEntity(
            id=generate_session_id(),
            start_time=now_ms,
            created_at=now_ms // 1000,
        )

        session = await self.game_repository.create(session_entity)
        logger.info(f"Game session {session.id} started")
        return session


class EndGameUseCase:
    """Use case for submitting a score and ending a session

    The session is consumed before anything else is decided, so an id can
    produce at most one outcome: a rejected duration, a non-qualifying
    score, or one pending proof.
    """

    def __init__(
        self,
        game_repository: GameSessionRepositoryInterface,
        leaderboard_repository: LeaderboardRepositoryInterface,
        proof_repository: PendingProofRepositoryInterface,
        settings: Settings,
        clock: Clock,
    ):
        self.game_repository = game_repository
        self.leaderboard_repository = leaderboard_repository
        self.proof_repository = proof_repository
        self.settings = settings
        self.clock = clock

    async def execute(self, session_id: str, score: int) -> EndGameResult:
        """End a game session and issue a proof for a qualifying score"""
        if not session_id or isinstance(score, bool) or not isinstance(score, int):
            raise InvalidRequest("gameId and score are required")

        submitted = Score(score)
        if not submitted.is_within(self.settings.min_score, self.settings.max_score):
            raise InvalidRequest("Score out of valid range")

        session = await self.game_repository.consume(session_id)
        if session is None:
            raise SessionNotFound()

        now_ms = self.clock.now_ms()
        duration = Duration.between(session.start_time, now_ms)
        if not duration.is_within(self.settings.min_game_duration, self.settings.max_game_duration):
            logger.warning(f"Game session {session_id} rejected: lasted {duration}")
            raise InvalidDuration(duration.milliseconds)

        top_entries = await self.leaderboard_repository.get_top(self.settings.leaderboard_size)
        top_scores = [entry.score for entry in top_entries]
        if not submitted.qualifies_for(top_scores, self.settings.leaderboard_size):
            logger.info(f"Game session {session_id} ended with non-qualifying score {score}")
            return EndGameResult(qualifies=False)

        token = generate_proof_token()
        proof = PendingProofEntity(
            session_id=session_id,
            token_hash=hash_token(token),
            score=score,
            game_duration=duration.milliseconds,
            expires_at=now_ms + self.settings.token_expiry,
        )
        await self.proof_repository.create(proof)

        logger.info(f"Game session {session_id} qualified with score {score}; proof issued")
        return EndGameResult(qualifies=True, token=token, expires_in=self.settings.token_expiry)


class RegisterTopScoreUseCase:
    """Use case for exchanging a proof token for a leaderboard entry"""

    def __init__(
        self,
        leaderboard_repository: LeaderboardRepositoryInterface,
        proof_repository: PendingProofRepositoryInterface,
        settings: Settings,
        clock: Clock,
    ):
        self.leaderboard_repository = leaderboard_repository
        self.proof_repository = proof_repository
        self.settings = settings
        self.clock = clock

    async def execute(self, session_id: str, username: str, token: str) -> RegisterResult:
        """Register a player name for a qualifying score"""
        if not session_id or not username or not token:
            raise InvalidRequest("gameId, username and token are required")

        name = username.strip()
        max_length = self.settings.username_max_length
        if not name or len(username) > max_length:
            raise InvalidRequest(f"Username must be between 1 and {max_length} characters")

        proof = await self.proof_repository.find(session_id, hash_token(token))
        if proof is None:
            raise ProofNotFound()

        if proof.is_expired(self.clock.now_ms()):
            await self.proof_repository.delete(session_id)
            logger.warning(f"Expired proof presented for game session {session_id}")
            raise ProofExpired()

        # The proof is redeemed in the leaderboard transaction; a failure
        # leaves it in place so the client can retry
        entry = LeaderboardEntryEntity(
            id=None,
            username=name,
            score=proof.score,
            achieved_at=self.clock.now_s(),
        )
        inserted = await self.leaderboard_repository.insert_and_trim(
            entry, keep=self.settings.leaderboard_size, proof=proof
        )
        if inserted is None:
            logger.warning(f"Proof for game session {session_id} was already redeemed")
            raise ProofNotFound()

        logger.info(f"Registered {name!r} with score {proof.score} for game session {session_id}")
        return RegisterResult(username=name, score=proof.score)


class GetLeaderboardUseCase:
    """Use case for getting leaderboard"""

    def __init__(self, leaderboard_repository: LeaderboardRepositoryInterface, settings: Settings):
        self.leaderboard_repository = leaderboard_repository
        self.settings = settings

    async def execute(self) -> List[LeaderboardEntryEntity]:
        """Get the current top scores, best first"""
        return await self.leaderboard_repository.get_top(self.settings.leaderboard_size)
