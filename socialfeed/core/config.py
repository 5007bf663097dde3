"""
Configuration settings for the application.
"""
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Load environment variables from .env file if it exists
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    logger.debug(f"Loaded .env from: {env_path}")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # API configuration
    API_PORT: int = Field(default=8000)
    API_HOST: str = Field(default="0.0.0.0")

    # Database configuration
    DB_HOST: str = Field(default="localhost")
    DB_PORT: str = Field(default="5432")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="postgres")
    DB_NAME: str = Field(default="socialfeed")

    # Either given directly (Heroku style) or assembled from the DB_* values above
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    # Upper bound in seconds for a single store call
    DB_COMMAND_TIMEOUT: float = Field(default=30.0)
    DB_CREATE_TABLES: bool = Field(default=False)

    # CORS configuration
    CORS_ORIGINS: Union[str, List[str]] = Field(default="*")

    # JWT configuration
    JWT_SECRET_KEY: str = Field(...)
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_MINUTES: int = Field(default=10)
    TOKEN_COOKIE_NAME: str = Field(default="token")

    # Password hashing
    PASSWORD_BCRYPT_ROUNDS: int = Field(default=12)

    LOG_LEVEL: str = Field(default="INFO")

    @field_validator("DATABASE_URL", mode="before")
    def assemble_database_url(cls, v: Optional[str], info: Any) -> str:
        """
        Assemble the database URL if not provided and make sure the
        PostgreSQL URLs use the asyncpg driver.
        """
        if v is None:
            values = info.data
            v = (
                f"postgresql+asyncpg://{values.get('DB_USER')}:{values.get('DB_PASSWORD')}"
                f"@{values.get('DB_HOST')}:{values.get('DB_PORT')}/{values.get('DB_NAME')}"
            )

        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql+asyncpg://", 1)
        elif v.startswith("postgresql://"):
            v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """
        Parse a comma-separated string into a list of CORS origins.
        """
        if isinstance(v, str) and v != "*":
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    class Config:
        """Config for the BaseSettings class."""
        env_file = ".env"
        case_sensitive = True
        extra = 'ignore'  # Ignore extra fields from environment


# Create settings object
settings = Settings()
