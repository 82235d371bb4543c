"""Game session schemas for request/response validation"""

from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator


def ensure_utf8(v: str) -> str:
    """Reject text that cannot be encoded as UTF-8, such as lone surrogates"""
    try:
        v.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("Must be valid UTF-8 text") from None
    return v


class StartGameResponse(BaseModel):
    """Schema for start game response"""

    game_id: str = Field(..., alias="gameId")
    message: str = "Game started"

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "gameId": "3f0c2a9e-8a61-4f53-9b1e-2f4d7b5c1a20",
                "message": "Game started",
            }
        }


class EndGameRequest(BaseModel):
    """Schema for end game request"""

    game_id: str = Field(..., alias="gameId")
    score: StrictInt

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, v: str) -> str:
        return ensure_utf8(v)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "gameId": "3f0c2a9e-8a61-4f53-9b1e-2f4d7b5c1a20",
                "score": 500,
            }
        }


class EndGameResponse(BaseModel):
    """Schema for end game response

    ``token`` and ``expiresIn`` are only present when the score qualifies.
    """

    is_top3: bool = Field(..., alias="isTop3")
    token: Optional[str] = None
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    message: str

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "isTop3": True,
                "token": "9c2e...e41a",
                "expiresIn": 300000,
                "message": "Congratulations! You made the top 3. Register your name.",
            }
        }


class RegisterTopScoreRequest(BaseModel):
    """Schema for leaderboard registration request"""

    game_id: str = Field(..., alias="gameId")
    username: str
    token: str

    @field_validator("game_id", "username", "token")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return ensure_utf8(v)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "gameId": "3f0c2a9e-8a61-4f53-9b1e-2f4d7b5c1a20",
                "username": "Ann",
                "token": "9c2e...e41a",
            }
        }


class RegisterTopScoreResponse(BaseModel):
    """Schema for leaderboard registration response"""

    success: bool = True
    score: int
    message: str = "Name registered in the top 3"


class LeaderboardEntry(BaseModel):
    """Schema for leaderboard entry"""

    username: str
    score: int

    class Config:
        from_attributes = True


class LeaderboardResponse(BaseModel):
    """Schema for leaderboard response"""

    leaderboard: List[LeaderboardEntry]
    timestamp: str

    class Config:
        json_schema_extra = {
            "example": {
                "leaderboard": [
                    {"username": "Ann", "score": 900},
                    {"username": "Bob", "score": 500},
                    {"username": "Cy", "score": 120},
                ],
                "timestamp": "2024-01-01T12:00:00.000Z",
            }
        }
