"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseModel):
    """Backend API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]

    # Request timeout in seconds for every backend call
    timeout: float = 30.0

    @computed_field
    @property
    def base_url(self) -> str:
        """Construct base URL from host.

        In development: http://localhost:8000
        In production: https://api.invoicer.app
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            # Production uses standard ports (80/443)
            return f"{self.protocol}://{self.host}"


class OAuthSettings(BaseModel):
    """Mailbox OAuth configuration."""

    # Provider segment used in /api/email-accounts/oauth/{provider}/...
    provider: str = "gmail"


class StorageSettings(BaseModel):
    """Client-local storage configuration."""

    # Durable storage file (holds the session identity between runs)
    path: Path = Path("~/.invoicer/storage.json")

    # Fixed keys, shared with the web client
    access_token_key: str = "access_token"
    user_key: str = "user"
    invite_correlation_key: str = "pending_email_invite_token"


class UISettings(BaseModel):
    """Page behaviour configuration."""

    # Seconds a success screen stays visible before navigating away
    invite_redirect_delay: float = 3.0
    account_redirect_delay: float = 2.0
    login_redirect_delay: float = 0.0

    # Lifetime requested for newly created invite links
    invite_expiry_hours: int = 24


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Client settings.

    Configuration is driven by environment and host values, with the
    backend URL computed from them. Set environment variables to override:

    Development (default):
        API_HOST=localhost
        API_PORT=8000
        ENVIRONMENT=development
        -> API: http://localhost:8000

    Production:
        API_HOST=api.invoicer.app
        ENVIRONMENT=production
        -> API: https://api.invoicer.app
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows UI__INVITE_REDIRECT_DELAY syntax
    )

    # Environment determines protocol and defaults
    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Backend host configuration (base URL computed from these)
    api_host: str = "localhost"
    api_port: int = 8000
    api_timeout: float = 30.0

    # Nested settings
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http"
    )  # Overwritten in validator
    oauth: OAuthSettings = OAuthSettings()
    storage: StorageSettings = StorageSettings()
    ui: UISettings = UISettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings from host and environment."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(
            host=self.api_host,
            port=self.api_port,
            protocol=protocol,
            timeout=self.api_timeout,
        )
        return self

    @property
    def storage_path(self) -> Path:
        """Durable storage file with the user's home expanded."""
        return self.storage.path.expanduser()
