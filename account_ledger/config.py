"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _build_database_url() -> str:
    """Assemble the Postgres URL from the individual DB_* variables."""
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "postgres")
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    database = os.getenv("DB_DATABASE", "postgres_api_db")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Application
        self.APP_NAME: str = os.getenv("APP_NAME", "Account Ledger")
        self.APP_VERSION: str = "0.1.0"
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8080"))

        # Database
        self.DATABASE_URL: str = os.getenv("DATABASE_URL") or _build_database_url()
        self.PG_MAX: int = int(os.getenv("PG_MAX", "10"))
        self.PG_MIN: int = int(os.getenv("PG_MIN", "5"))
        self.DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))

        # Startup retry against the database
        self.DB_CONNECT_RETRIES: int = int(os.getenv("DB_CONNECT_RETRIES", "10"))
        self.DB_CONNECT_RETRY_DELAY: float = float(
            os.getenv("DB_CONNECT_RETRY_DELAY", "3")
        )

        # Environment
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
