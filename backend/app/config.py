"""Application configuration using pydantic-settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Floor for INVITATION_MAX_LENGTH; the ceiling must fit text, an ellipsis and the sign-off
MIN_INVITATION_MAX_LENGTH = 100


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "WeddingInvites AI"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database (SQLite by default, any SQLAlchemy async URL works)
    database_url: str = "sqlite+aiosqlite:///./wedding_invites.db"

    # LLM (LiteLLM): DeepSeek by default, any LiteLLM model string works
    default_llm_model: str = "deepseek/deepseek-chat"
    deepseek_api_key: str = ""
    openai_api_key: str = ""
    llm_api_base: str = ""
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1500
    llm_request_timeout: float = 60.0

    # Invitation generation
    invitation_min_length: int = 300
    invitation_max_length: int = 400
    generation_max_attempts: int = 3
    generation_retry_base_delay: float = 1.0  # seconds
    generation_retry_max_jitter: float = 1.0  # seconds
    invitation_cache_ttl_seconds: int = 3600

    # SMTP
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from_email: str = ""
    smtp_timeout: float = 30.0

    # Frontend
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    @model_validator(mode="after")
    def _ensure_frontend_in_cors(self) -> "Settings":
        """Ensure the configured frontend_url is always in cors_origins."""
        if self.frontend_url and self.frontend_url not in self.cors_origins:
            self.cors_origins.append(self.frontend_url)
        return self

    @model_validator(mode="after")
    def _validate_invitation_lengths(self) -> "Settings":
        """Reject an inverted invitation length band or a ceiling too small for a sign-off."""
        if self.invitation_max_length < MIN_INVITATION_MAX_LENGTH:
            raise ValueError(
                f"INVITATION_MAX_LENGTH must be at least {MIN_INVITATION_MAX_LENGTH}, "
                f"got {self.invitation_max_length}"
            )
        if self.invitation_min_length > self.invitation_max_length:
            raise ValueError(
                "INVITATION_MIN_LENGTH must not exceed INVITATION_MAX_LENGTH "
                f"({self.invitation_min_length} > {self.invitation_max_length})"
            )
        return self

    @property
    def llm_configured(self) -> bool:
        """Whether any LLM provider key is available."""
        return bool(self.deepseek_api_key or self.openai_api_key)

    @property
    def smtp_configured(self) -> bool:
        """Whether enough SMTP settings exist to deliver mail."""
        return bool(self.smtp_host and self.smtp_port and self.smtp_from_email)

    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses an async driver."""
        url = self.database_url
        if url.startswith("sqlite:///"):
            url = url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return url


settings = Settings()
