"""Shared fixtures: in-memory SQLite, frozen clock and in-memory repositories"""

from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from arcade_scores.core.clock import FrozenClock
from arcade_scores.core.config import Settings, get_settings
from arcade_scores.core.dependencies import get_clock
from arcade_scores.domain.entities.game_session import GameSessionEntity
from arcade_scores.domain.entities.leaderboard_entry import LeaderboardEntryEntity
from arcade_scores.domain.entities.pending_proof import PendingProofEntity
from arcade_scores.domain.exceptions import StorageFailure
from arcade_scores.domain.interfaces.game_session_repository import GameSessionRepositoryInterface
from arcade_scores.domain.interfaces.leaderboard_repository import LeaderboardRepositoryInterface
from arcade_scores.domain.interfaces.pending_proof_repository import (
    PendingProofRepositoryInterface,
)
from arcade_scores.infrastructure.database import models  # noqa: F401
from arcade_scores.infrastructure.database.connection import Base, get_async_db
from arcade_scores.main import app

SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# In-memory repositories


class InMemoryGameSessionRepository(GameSessionRepositoryInterface):
    """Dict-backed session store"""

    def __init__(self) -> None:
        self.sessions: Dict[str, GameSessionEntity] = {}

    async def create(self, session: GameSessionEntity) -> GameSessionEntity:
        if session.id in self.sessions:
            raise StorageFailure()
        self.sessions[session.id] = session
        return session

    async def consume(self, session_id: str) -> Optional[GameSessionEntity]:
        return self.sessions.pop(session_id, None)

    async def delete_created_before(self, cutoff_s: int) -> int:
        stale = [sid for sid, s in self.sessions.items() if s.created_at < cutoff_s]
        for sid in stale:
            del self.sessions[sid]
        return len(stale)


class InMemoryPendingProofRepository(PendingProofRepositoryInterface):
    """Dict-backed pending proof store"""

    def __init__(self) -> None:
        self.proofs: Dict[str, PendingProofEntity] = {}

    async def create(self, proof: PendingProofEntity) -> PendingProofEntity:
        if proof.session_id in self.proofs:
            raise StorageFailure()
        self.proofs[proof.session_id] = proof
        return proof

    async def find(self, session_id: str, token_hash: str) -> Optional[PendingProofEntity]:
        proof = self.proofs.get(session_id)
        if proof is None or proof.token_hash != token_hash:
            return None
        return proof

    async def delete(self, session_id: str) -> bool:
        return self.proofs.pop(session_id, None) is not None

    async def delete_expired(self, now_ms: int) -> int:
        expired = [sid for sid, p in self.proofs.items() if p.expires_at < now_ms]
        for sid in expired:
            del self.proofs[sid]
        return len(expired)


class InMemoryLeaderboardRepository(LeaderboardRepositoryInterface):
    """List-backed leaderboard; set ``fail_next_insert`` to simulate an outage

    Redeems proofs from the shared ``proofs`` dict of the proof store.
    """

    def __init__(self, proofs: Optional[Dict[str, PendingProofEntity]] = None) -> None:
        self.proofs = proofs if proofs is not None else {}
        self.entries: List[LeaderboardEntryEntity] = []
        self.next_id = 1
        self.fail_next_insert = False

    def _ranked(self) -> List[LeaderboardEntryEntity]:
        return sorted(self.entries, key=lambda e: (-e.score, e.id))

    async def get_top(self, limit: int) -> List[LeaderboardEntryEntity]:
        return self._ranked()[:limit]

    async def insert_and_trim(
        self,
        entry: LeaderboardEntryEntity,
        keep: int,
        proof: Optional[PendingProofEntity] = None,
    ) -> Optional[LeaderboardEntryEntity]:
        if self.fail_next_insert:
            self.fail_next_insert = False
            raise StorageFailure()

        if proof is not None:
            stored = self.proofs.get(proof.session_id)
            if stored is None or stored.token_hash != proof.token_hash:
                return None
            del self.proofs[proof.session_id]

        inserted = LeaderboardEntryEntity(
            id=self.next_id,
            username=entry.username,
            score=entry.score,
            achieved_at=entry.achieved_at,
        )
        self.next_id += 1
        self.entries.append(inserted)
        self.entries = self._ranked()[:keep]
        return inserted


# Fixtures


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at a fixed instant"""
    return FrozenClock()


@pytest.fixture
def test_settings() -> Settings:
    """Default settings, ignoring any local .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def session_repository() -> InMemoryGameSessionRepository:
    return InMemoryGameSessionRepository()


@pytest.fixture
def proof_repository() -> InMemoryPendingProofRepository:
    return InMemoryPendingProofRepository()


@pytest.fixture
def leaderboard_repository(
    proof_repository: InMemoryPendingProofRepository,
) -> InMemoryLeaderboardRepository:
    return InMemoryLeaderboardRepository(proof_repository.proofs)


@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite engine with the schema created"""
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for repository tests"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(
    session_factory, clock: FrozenClock, test_settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with database, clock and settings overridden"""

    async def override_get_async_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def file_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Sessions with their own connections to a file database"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'scores.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
