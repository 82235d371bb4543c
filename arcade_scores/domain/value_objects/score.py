"""Score value object"""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Score:
    """A submitted game score"""

    points: int

    def is_within(self, minimum: int, maximum: int) -> bool:
        """Check inclusive bounds"""
        return minimum <= self.points <= maximum

    def qualifies_for(self, top_scores: Sequence[int], capacity: int) -> bool:
        """Check if this score would enter a leaderboard of ``capacity`` slots

        ``top_scores`` is the current board, best first. A board with a free
        slot accepts anything; a full one only a score strictly above its
        lowest entry.
        """
        if len(top_scores) < capacity:
            return True
        return self.points > top_scores[capacity - 1]
