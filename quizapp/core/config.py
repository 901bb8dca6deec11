"""
Core configuration for the QuizApp backend
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from quizapp import __version__


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    APP_NAME: str = "QuizApp"
    APP_VERSION: str = __version__
    APP_DESCRIPTION: str = "Quiz platform backend: quizzes, progression, leaderboard and friends"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    FRONTEND_HOST: str = Field(default="http://localhost:5173")
    API_PREFIX: str = ""

    # Security
    BCRYPT_ROUNDS: int = 12
    SESSION_COOKIE_NAME: str = "quizapp_session"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_TTL_DAYS: int = 7

    # Database
    DATABASE_URL: Optional[str] = Field(default=None)

    # Generative AI
    GEMINI_API_KEY: Optional[str] = Field(default=None)
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash-8b")
    AI_PERSIST_GENERATED_QUIZZES: bool = Field(default=True)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOG_FILE: Optional[str] = Field(default=None)
    LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    RATE_LIMIT_REQUESTS: int = Field(default=100)
    RATE_LIMIT_PERIOD: int = Field(default=60)  # seconds

    def get_database_url(self) -> str:
        """Get database URL with proper formatting"""
        if self.DATABASE_URL:
            # Handle Render's postgres:// URLs
            db_url = self.DATABASE_URL
            if db_url.startswith("postgres://"):
                db_url = db_url.replace("postgres://", "postgresql://", 1)
            return db_url

        # Default for development
        return "sqlite:///./quizapp.db"

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as list"""
        return [origin.strip() for origin in self.FRONTEND_HOST.split(",") if origin.strip()]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
