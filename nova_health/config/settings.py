"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Allow extra fields from .env files that aren't defined here
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=[".env", ".env.local"],  # Load .env first, then .env.local (so .env.local overrides)
    )

    # Application settings
    app_name: str = "Nova Wellness Gateway"
    version: str = "1.0.0"
    environment: str = Field(default="local", validation_alias="SYSTEM_ENVIRONMENT")
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = ""

    # CORS settings
    allowed_origins: Optional[List[str]] = None

    # Logging settings
    log_level: str = "INFO"

    # Inference service (AWS Bedrock) settings
    aws_region: str = "us-east-1"
    inference_model_id: str = "amazon.titan-text-express-v1"
    max_token_count: int = 500
    temperature: float = 0.7
    top_p: float = 0.9
    stop_sequences: List[str] = Field(default_factory=list)

    # Assistant replies kept in memory for diagnostics
    chat_history_limit: int = 200

    # Dashboard settings
    backend_url: str = "http://localhost:5000"
    dashboard_user_id: Optional[str] = "demo-user"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == "local"

    @property
    def cors_origins(self) -> List[str]:
        return self.allowed_origins or ["*"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
