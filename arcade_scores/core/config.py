"""Application configuration settings"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(default="sqlite:///./game_scores.db")

    # Application
    app_name: str = Field(default="Arcade Scores")
    debug: bool = Field(default=False)
    version: str = Field(default="1.0.0")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    cors_origins: str = Field(default="*")

    # Game Settings (milliseconds unless noted)
    min_game_duration: int = Field(default=1, ge=0)
    max_game_duration: int = Field(default=600000, gt=0)  # 10 minutes
    token_expiry: int = Field(default=300000, gt=0)  # 5 minutes
    min_score: int = Field(default=0)
    max_score: int = Field(default=999999)
    leaderboard_size: int = Field(default=3, ge=1)
    username_max_length: int = Field(default=50, ge=1)

    # Cleanup
    cleanup_interval: int = Field(default=300000, gt=0)  # 5 minutes
    session_retention: int = Field(default=3600, gt=0)  # seconds

    @model_validator(mode="after")
    def check_bounds(self) -> "Settings":
        """Reject inconsistent numeric bounds"""
        if self.min_game_duration > self.max_game_duration:
            raise ValueError("MIN_GAME_DURATION must not exceed MAX_GAME_DURATION")
        if self.min_score > self.max_score:
            raise ValueError("MIN_SCORE must not exceed MAX_SCORE")
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Settings dependency (overridable in tests)"""
    return settings
