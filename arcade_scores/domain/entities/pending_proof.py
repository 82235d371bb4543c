"""Pending proof domain entity"""

from dataclasses import dataclass


@dataclass
class PendingProofEntity:
    """A qualifying score waiting for its player name

    Only the digest of the proof token is kept; the raw token leaves the
    system once, in the end-game response.
    """

    session_id: str
    token_hash: str
    score: int
    game_duration: int  # milliseconds
    expires_at: int  # epoch milliseconds

    def is_expired(self, now_ms: int) -> bool:
        """Check if the registration window has closed"""
        return now_ms > self.expires_at
