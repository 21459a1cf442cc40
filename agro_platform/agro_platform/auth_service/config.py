"""
Configuration management for the Auth Service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

DEV_JWT_SECRET = "change-this-secret-in-prod"


class Settings(BaseSettings):
    """Auth Service configuration loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "Nexa Agro Auth Service"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    # Exposes raw error causes as `detalle` in 500 responses
    DEBUG: bool = False

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./agro_auth.db"
    SEED_REFERENCE_DATA: bool = True

    # Session tokens
    JWT_SECRET: str = DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"

    # Password hashing
    PASSWORD_SCHEME: str = "pbkdf2_sha256"
    PASSWORD_ROUNDS: Optional[int] = None

    # HTTP
    API_PREFIX: str = "/api/auth"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


# Global settings instance
settings = Settings()
