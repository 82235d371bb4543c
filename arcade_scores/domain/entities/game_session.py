"""Game session domain entity"""

from dataclasses import dataclass


@dataclass
class GameSessionEntity:
    """An active play-through awaiting its score"""

    id: str
    start_time: int  # epoch milliseconds
    created_at: int  # epoch seconds, used by the sweep

