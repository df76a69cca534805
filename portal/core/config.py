from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


DEFAULT_SESSION_SECRET = "dev-session-secret-change-me"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_env: str = Field("development", alias="APP_ENV")  # development | production

    supabase_url: Optional[str] = Field(None, alias="SUPABASE_URL")
    supabase_anon_key: Optional[str] = Field(None, alias="SUPABASE_ANON_KEY")
    backend_timeout_seconds: float = Field(10.0, alias="BACKEND_TIMEOUT_SECONDS")
    documents_bucket: str = Field("student-documents", alias="DOCUMENTS_BUCKET")

    session_secret_key: str = Field(DEFAULT_SESSION_SECRET, alias="SESSION_SECRET_KEY")
    session_algorithm: str = Field("HS256", alias="SESSION_ALGORITHM")
    session_cookie_name: str = Field("portal_session", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(False, alias="SESSION_COOKIE_SECURE")
    session_cookie_max_age: int = Field(60 * 60 * 24 * 365, alias="SESSION_COOKIE_MAX_AGE")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_origins: str = Field("http://localhost:5173", alias="CORS_ALLOW_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @model_validator(mode="after")
    def require_production_secrets(self) -> "Settings":
        if not self.is_production:
            return self
        if not self.backend_configured:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in production")
        if self.session_secret_key == DEFAULT_SESSION_SECRET:
            raise ValueError("SESSION_SECRET_KEY must be set in production")
        return self


settings = Settings()
