"""Leaderboard entry domain entity"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class LeaderboardEntryEntity:
    """A registered top score"""

    id: Optional[int]
    username: str
    score: int
    achieved_at: int  # epoch seconds
