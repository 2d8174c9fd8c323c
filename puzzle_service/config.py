from functools import lru_cache
from typing import Dict, Optional, Tuple

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from puzzle_facts import LayoutConfig

# Piece count -> (rows, cols)
PIECE_COUNT_OPTIONS: Dict[int, Tuple[int, int]] = {
    12: (3, 4),
    15: (3, 5),
    16: (4, 4),
    21: (3, 7),
}


class Settings(BaseSettings):
    """Application settings configuration."""

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Fact Puzzle API"
    LOG_LEVEL: str = "INFO"

    # Photo settings
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    PUZZLE_MAX_SIDE: int = 2000

    # Sessions kept in memory
    MAX_SESSIONS: int = 100
    SESSION_TTL_SECONDS: int = 3600

    # Cut-line style
    LINE_WIDTH: float = 2
    LINE_OPACITY: float = 0.6
    LINE_COLOR: str = "#000000"

    # Text layout
    FONT_PATH: Optional[str] = None
    MIN_FONT_SIZE: int = 8
    MAX_FONT_SIZE: int = 40
    MAX_LINES: int = 6
    REWRITE_MIN_RETENTION: float = 0.6

    # CORS settings
    BACKEND_CORS_ORIGINS: list[str] = ["*"]

    class Config:
        """Pydantic configuration class."""

        case_sensitive = True
        env_file = ".env"

    @field_validator("LINE_OPACITY", "REWRITE_MIN_RETENTION")
    @classmethod
    def validate_fraction(cls, v: float) -> float:
        """Fractions must lie in [0, 1]."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("must be between 0 and 1")
        return v

    @field_validator(
        "PUZZLE_MAX_SIDE",
        "MIN_FONT_SIZE",
        "MAX_LINES",
        "MAX_UPLOAD_SIZE",
        "MAX_SESSIONS",
        "SESSION_TTL_SECONDS",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Sizes and counts must be positive."""
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @model_validator(mode="after")
    def validate_font_range(self) -> "Settings":
        """MAX_FONT_SIZE may not be below MIN_FONT_SIZE."""
        if self.MAX_FONT_SIZE < self.MIN_FONT_SIZE:
            raise ValueError("MAX_FONT_SIZE must be at least MIN_FONT_SIZE")
        return self

    def layout_config(self) -> LayoutConfig:
        """Layout tunables for the puzzle core."""
        return LayoutConfig(
            min_font_size=self.MIN_FONT_SIZE,
            max_font_size=self.MAX_FONT_SIZE,
            max_lines=self.MAX_LINES,
            rewrite_min_retention=self.REWRITE_MIN_RETENTION,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create instance
settings = get_settings()
