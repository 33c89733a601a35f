"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SESSION_SECRET = "fallback-dev-secret-do-not-use-in-production"


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite:///./reqanalyst.db"
    store_timeout_seconds: int = 5

    # Environment ("development" or "production")
    environment: str = "development"

    # Sessions
    session_secret: str = DEV_SESSION_SECRET  # Generate with: openssl rand -hex 32
    session_cookie_name: str = "ai_requirements_session"
    session_max_age_days: int = 30
    jwt_algorithm: str = "HS256"
    bcrypt_rounds: int = 12

    # Password reset
    app_url: str = "http://localhost:5173"
    reset_token_expire_hours: int = 24

    # Email (SendGrid)
    sendgrid_api_key: str = ""
    email_from_address: str = "noreply@example.com"
    email_from_name: str = "AI Requirements Analyst"
    email_timeout_seconds: float = 5.0

    # Generation (OpenAI-compatible chat completions)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4-turbo"
    llm_timeout_seconds: float = 60.0

    # Rate limiting
    rate_limit_enabled: bool = True

    # Application
    log_level: str = "INFO"
    debug: bool = True

    # CORS
    allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
