"""
Environment configuration for the hotel management system.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
import secrets
import string
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_INITIAL_BOOKING_STATUSES = {"pending", "confirmed"}


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    # Application configuration
    APP_NAME: str = "Hotel Management System"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "*"

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hotel.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_POOL_OVERFLOW: int = 20
    DB_SLOW_QUERY_SECONDS: float = 0.5

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # Seeded administrator, created on startup when both are set
    FIRST_ADMIN_EMAIL: Optional[str] = None
    FIRST_ADMIN_PASSWORD: Optional[str] = None
    FIRST_ADMIN_NAME: str = "Administrator"

    # Business logic
    BOOKING_INITIAL_STATUS: str = "confirmed"
    BOOKING_MAX_NIGHTS: int = 30
    BOOKING_MAX_GUESTS: int = 10
    BOOKING_ALLOW_PAST_DATES: bool = False

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_FILE: Optional[str] = None
    ENABLE_STRUCTURED_LOGGING: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    # Validators
    @validator('LOG_LEVEL', pre=True)
    def validate_log_level(cls, v: str) -> str:
        """Normalise LOG_LEVEL and reject unknown levels"""
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(VALID_LOG_LEVELS)}")
        return level

    @validator('LOG_FORMAT', pre=True)
    def validate_log_format(cls, v: str) -> str:
        fmt = str(v).lower()
        if fmt not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return fmt

    @validator('BOOKING_INITIAL_STATUS', pre=True)
    def validate_initial_status(cls, v: str) -> str:
        """Bookings may only start in an active, non-terminal state"""
        status = str(v).lower()
        if status not in VALID_INITIAL_BOOKING_STATUSES:
            raise ValueError(
                f"BOOKING_INITIAL_STATUS must be one of {sorted(VALID_INITIAL_BOOKING_STATUSES)}"
            )
        return status

    @validator('BOOKING_MAX_GUESTS')
    def validate_max_guests(cls, v: int) -> int:
        if not 1 <= v <= 10:
            raise ValueError("BOOKING_MAX_GUESTS must be between 1 and 10")
        return v

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a JSON list or a comma separated string"""
        value = self.CORS_ORIGINS.strip()
        if value.startswith('[') and value.endswith(']'):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        return self.DATABASE_URL

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
