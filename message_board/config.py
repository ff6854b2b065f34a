"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from message_board.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")

DEFAULT_SESSION_SECRET = "change_this_secret"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
        populate_by_name=True,
    )

    # ===== Database Configuration =====
    app_database_url: str = Field(
        default="sqlite+aiosqlite:///./messages.db",
        alias="MESSAGE_BOARD_DATABASE_URL",
        description="Async SQLAlchemy URL of the application database",
    )

    db_max_retries: int = Field(
        default=3,
        alias="DB_MAX_RETRIES",
        description="Attempts per storage call before giving up on transient errors",
    )

    # ===== Session Configuration =====
    session_secret: str = Field(
        default=DEFAULT_SESSION_SECRET,
        alias="SESSION_SECRET",
        description="Secret used to sign session cookies and key token digests",
    )

    session_cookie_name: str = Field(
        default="sid",
        alias="SESSION_COOKIE_NAME",
        description="Name of the session cookie",
    )

    session_cookie_secure: bool = Field(
        default=False,
        alias="SESSION_COOKIE_SECURE",
        description="Set the Secure flag; only for deployments terminating TLS here",
    )

    session_ttl_days: int = Field(
        default=7,
        alias="SESSION_TTL_DAYS",
        description="Session lifetime in days",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    port: int = Field(default=3000, alias="PORT", description="Server port number")

    static_dir: str = Field(
        default="public",
        alias="STATIC_DIR",
        description="Directory holding the static front-end",
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins; CORS middleware is skipped when empty",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for insecure deployments."""

        if self.session_secret == DEFAULT_SESSION_SECRET:
            logger.warning(
                "SESSION_SECRET is not set; using the insecure default. "
                "Override it before deploying."
            )

        if self.session_ttl_days <= 0:
            raise ValueError("SESSION_TTL_DAYS must be a positive number of days")

        logger.debug(f"Using database: {self.app_database_url}")
        logger.debug(f"Session cookie secure flag: {self.session_cookie_secure}")

        return self


# Global settings instance
settings = Settings()
