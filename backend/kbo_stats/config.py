from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore", case_sensitive=False)

    app_env: str = Field(default="dev", validation_alias="APP_ENV")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Comma-separated browser origins; empty in dev means any origin.
    cors_allow_origins: str = Field(default="", validation_alias="CORS_ALLOW_ORIGINS")

    # Upstream (KBO official site)
    kbo_base_url: str = Field(default="https://www.koreabaseball.com", validation_alias="KBO_BASE_URL")
    kbo_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        ),
        validation_alias="KBO_USER_AGENT",
    )
    request_timeout_seconds: float = Field(default=30.0, validation_alias="REQUEST_TIMEOUT_SECONDS")
    fetch_max_attempts: int = Field(default=4, ge=1, validation_alias="FETCH_MAX_ATTEMPTS")
    # Base delay for exponential backoff between retries (0 disables waiting).
    fetch_backoff_seconds: float = Field(default=0.5, ge=0, validation_alias="FETCH_BACKOFF_SECONDS")


settings = Settings()
