"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from engage.domain.value import ReactionType


class ApiSettings(BaseModel):
    """Backend API configuration."""

    base_url: str = "https://growing-together-app.onrender.com/api"

    # Seconds before a request is treated as failed
    timeout: float = Field(default=30.0, gt=0)


class ThreadSettings(BaseModel):
    """Comment thread configuration."""

    # Top-level comments per page
    page_size: int = Field(default=10, ge=1, le=100)

    # Levels of nested replies the server returns per fetch
    max_depth: int = Field(default=5, ge=0)

    max_content_length: int = Field(default=1000, ge=1)


class ReactionSettings(BaseModel):
    """Reaction configuration."""

    # Reaction applied by a plain activation (primary tap)
    default_type: ReactionType = ReactionType.LIKE

    # Settling window before a reaction intent is sent to the server.
    # Rapid taps inside the window collapse into a single request.
    settle_seconds: float = Field(default=0.3, ge=0)


class SessionSettings(BaseModel):
    """Seed identity for headless use.

    Normally the authentication layer signs the user in at runtime;
    these values only pre-populate the session store.
    """

    user_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    access_token: str | None = None


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Engine settings.

    Set environment variables to override, using ``__`` for nested sections:

        API__BASE_URL=http://localhost:5000/api
        THREAD__PAGE_SIZE=20
        REACTIONS__SETTLE_SECONDS=0
        SESSION__USER_ID=64f1c0ffee...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["test", "development", "staging", "production"] = (
        "development"
    )
    debug: bool = False

    # Nested settings
    api: ApiSettings = ApiSettings()
    thread: ThreadSettings = ThreadSettings()
    reactions: ReactionSettings = ReactionSettings()
    session: SessionSettings = SessionSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
