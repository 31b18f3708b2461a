"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from notes_service import __version__


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Every value has a default suitable for local development only.
    Deployments override them through the container environment:
        DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD, PORT, ENVIRONMENT
    """

    PROJECT_NAME: str = "Notes API"
    SERVICE_NAME: str = "notes-service"
    VERSION: str = __version__
    ENVIRONMENT: str = "production"

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: list[str] = ["*"]

    # Database
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "notesdb"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "password"
    DB_POOL_SIZE: int = 5
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_RETRY_DELAY: float = 1.0

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    @property
    def DATABASE_URL(self) -> str:
        """Async PostgreSQL connection string using asyncpg driver."""
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_development(self) -> bool:
        """Internal error details are echoed to callers only in development."""
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()
