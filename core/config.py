"""
Configuration management for Compliance Hub.
Uses pydantic-settings for environment-based configuration.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="COMPLIANCE_",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"

    # Application
    app_name: str = "Compliance Hub"

    # Remote compliance agent
    agent_base_url: str = "http://localhost:8080/api"
    agent_id: str = "compliance-analyst"
    agent_api_key: Optional[str] = None
    # Transport-level only; the turn controller itself never times out a call
    agent_timeout_seconds: Optional[float] = 120.0

    # Conversation
    default_mode: str = "general"


settings = Settings()
