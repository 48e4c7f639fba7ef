"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export BASEROW_API_TOKEN=your-database-token
        export GOOGLE_CLIENT_SECRET=your-oauth-secret
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "Recruitment Gateway"

    # DEBUG: Passed to FastAPI(debug=...)
    DEBUG: bool = False

    # LOG_LEVEL: Root level for the gateway.* loggers
    LOG_LEVEL: str = "INFO"

    # FRONTEND_URL: Origin of the recruitment web app
    # - Used for CORS; the "www." variant is allowed as well
    FRONTEND_URL: str = "http://localhost:5173"

    # ---------------------------------------------------------------------------
    # ROW STORE (BASEROW) SETTINGS
    # ---------------------------------------------------------------------------
    # BASEROW_API_URL: Base URL of the hosted Baserow instance (no trailing slash)
    BASEROW_API_URL: str = "https://api.baserow.io"

    # BASEROW_API_TOKEN: Database token, sent as "Authorization: Token <token>"
    BASEROW_API_TOKEN: str = ""

    # Table identifiers inside the Baserow database
    USERS_TABLE_ID: int = 711
    SCHEDULES_TABLE_ID: int = 713

    # ROW_STORE_TIMEOUT: Seconds before a Baserow request is abandoned
    ROW_STORE_TIMEOUT: float = 15.0

    # ---------------------------------------------------------------------------
    # PASSWORD SETTINGS
    # ---------------------------------------------------------------------------
    # PASSWORD_HASH_ROUNDS: bcrypt work factor (2^rounds iterations)
    PASSWORD_HASH_ROUNDS: int = 10

    # MIN_PASSWORD_LENGTH: Shortest password accepted by change-password
    MIN_PASSWORD_LENGTH: int = 6

    # ---------------------------------------------------------------------------
    # GOOGLE OAUTH SETTINGS
    # ---------------------------------------------------------------------------
    # Google Cloud Console: https://console.cloud.google.com/apis/credentials
    #
    # Setup Instructions:
    # 1. Enable the Google Calendar API
    # 2. Create an OAuth 2.0 Client ID (Web application)
    # 3. Add authorized redirect URI: http://localhost:3001/google/auth/callback
    # 4. Copy Client ID and Client Secret to .env file

    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""

    # GOOGLE_REDIRECT_URI: Where Google sends users after authorization
    # - Must match exactly what's configured in Google Cloud Console
    GOOGLE_REDIRECT_URI: str = "http://localhost:3001/google/auth/callback"

    # GOOGLE_REQUEST_TIMEOUT: Seconds before a Google API request is abandoned
    GOOGLE_REQUEST_TIMEOUT: float = 30.0

    # DEFAULT_TIMEZONE: Used for interview events that don't specify one
    DEFAULT_TIMEZONE: str = "America/Sao_Paulo"

    @property
    def cors_origins(self) -> list[str]:
        """Frontend origin plus its www. variant."""
        origins = [self.FRONTEND_URL]
        if self.FRONTEND_URL.startswith("https://"):
            origins.append(self.FRONTEND_URL.replace("https://", "https://www.", 1))
        return origins


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from app.core.config import settings
settings = Settings()
