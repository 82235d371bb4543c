"""SQLAlchemy database models"""

from sqlalchemy import BigInteger, Column, Integer, String, Text

from arcade_scores.infrastructure.database.connection import Base


class ActiveGame(Base):
    """Game session between start and end"""

    __tablename__ = "active_games"

    id = Column(String(36), primary_key=True)
    start_time = Column(BigInteger, nullable=False)  # epoch milliseconds
    created_at = Column(BigInteger, nullable=False, index=True)  # epoch seconds


class TopScore(Base):
    """Leaderboard row"""

    __tablename__ = "top_scores"
    # Ids of trimmed rows are never reused, so id order is registration order
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False)
    score = Column(Integer, nullable=False, index=True)
    achieved_at = Column(BigInteger, nullable=False)  # epoch seconds


class PendingToken(Base):
    """Qualifying score awaiting a player name"""

    __tablename__ = "pending_tokens"

    id = Column(String(36), primary_key=True)  # game session id
    token_hash = Column(Text, nullable=False)
    score = Column(Integer, nullable=False)
    game_duration = Column(BigInteger, nullable=False)  # milliseconds
    expires_at = Column(BigInteger, nullable=False, index=True)  # epoch milliseconds
