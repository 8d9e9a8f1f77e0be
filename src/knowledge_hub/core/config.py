"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Header carrying the collection owner between client and service
OWNER_HEADER = "X-User-Id"


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Service side (REST API):
        POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_PORT,
        POSTGRES_DB

    Client side (entity stores):
        API_URL (http://localhost:8000), HTTP_TIMEOUT (10.0),
        SERIALIZE_MUTATIONS (True)

    Shared:
        LOG_LEVEL (INFO)
    """

    PROJECT_NAME: str = "Knowledge Hub"

    # Database
    POSTGRES_USER: str = "hub"
    POSTGRES_PASSWORD: str = "hub_password"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "hub_db"

    # Remote persistence service, as seen by the client
    API_URL: str = "http://localhost:8000"
    HTTP_TIMEOUT: float = 10.0

    # Apply mutations on the same entity id in issue order
    SERIALIZE_MUTATIONS: bool = True

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
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()
