from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path
from typing import List
import logging
import os

_logger = logging.getLogger(__name__)

# Look for .env in api directory (parent of langify directory)
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=False)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    # Fallback to current directory
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=False)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - hosting platforms provide DATABASE_URL (uppercase)
    database_url: str = ""
    database_echo: bool = False

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: List[str] = ["*"]

    # "development", "dev" or "local" expose tracebacks in error responses
    environment: str = "production"

    # Calendar-day policy for streaks, daily stats and leaderboards
    timezone: str = "UTC"

    # Gamification defaults
    default_target_xp_per_day: int = 50
    default_target_lessons_per_day: int = 1
    leaderboard_limit: int = 50
    leaderboard_window_days: int = 7
    max_vocabulary_strength: int = 5

    class Config:
        env_file = ".env"
        env_prefix = "LANGIFY_"
        case_sensitive = False
        extra = "ignore"

    def __init__(self, **kwargs):
        # DATABASE_URL is read without the LANGIFY_ prefix
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("LANGIFY_DATABASE_URL") or os.getenv("DATABASE_URL", "")
        super().__init__(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")


# Create settings instance
settings = Settings()

# Validate required DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")
