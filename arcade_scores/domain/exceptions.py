"""Game domain errors"""

from typing import Any, Optional


class GameError(Exception):
    """Base class for failures reported to API clients"""

    error_code = "GAME_ERROR"
    status_code = 500
    default_message = "Game error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidRequest(GameError):
    """Malformed or out-of-range client input"""

    error_code = "INVALID_REQUEST"
    status_code = 400
    default_message = "Invalid request"


class SessionNotFound(GameError):
    """Session unknown, already ended, or swept"""

    error_code = "SESSION_NOT_FOUND"
    status_code = 404
    default_message = "Game session not found or expired"


class InvalidDuration(GameError):
    """Game lasted less than the minimum or more than the maximum"""

    error_code = "INVALID_DURATION"
    status_code = 400
    default_message = "Invalid game duration"

    def __init__(self, duration_ms: int) -> None:
        self.duration_ms = duration_ms
        super().__init__(details={"duration": duration_ms})


class ProofNotFound(GameError):
    """No pending proof matches the session id and token"""

    error_code = "PROOF_NOT_FOUND"
    status_code = 404
    default_message = "Invalid or expired token"


class ProofExpired(GameError):
    """Pending proof matched but its window has passed"""

    error_code = "PROOF_EXPIRED"
    status_code = 410
    default_message = "Token expired"


class StorageFailure(GameError):
    """The store could not complete the operation; safe to retry"""

    error_code = "STORAGE_FAILURE"
    status_code = 500
    default_message = "Internal server error"
