from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Gatekeeper Webhook"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 3001

    # Gatekeeper analysis engine
    gatekeeper_url: str = "http://localhost:8080/api/analyze"
    gatekeeper_api_key: str = ""
    forward_timeout: float = 30.0  # Seconds, single attempt

    # GitHub enrichment (disabled when no token is set)
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_user_agent: str = "ai-gatekeeper-webhook"
    enrichment_timeout: float = 10.0  # Seconds
    enrichment_retries: int = 1  # Extra attempts on transport errors

    # Results window served to the dashboard
    results_capacity: int = 20

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
