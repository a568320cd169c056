"""Settings for the audit service, read from the environment and ``.env``.

Environment names are the upper-cased field names (SNIPEIT_URL,
ADMIN_PASSWORD, DATABASE_URL, ...). Bad values fail on the first
get_settings() call rather than at import.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: str = "asset-audit"
    app_version: str = "1.0.0"
    debug: bool = False

    # Snipe-IT. None turns the outbound timeout off entirely.
    snipeit_url: str = "http://localhost:8080"
    snipeit_timeout_seconds: float | None = 30.0
    asset_page_size: int = Field(500, gt=0)
    asset_search_limit: int = Field(50, gt=0)

    # Shared secret for admin routes, compared against X-Admin-Password.
    admin_password: SecretStr = SecretStr("admin123")

    # Audit store
    database_url: str = "sqlite+aiosqlite:///./db/audits.db"
    database_echo: bool = False
    database_auto_create: bool = True

    asset_cache_ttl_seconds: int = Field(600, gt=0)

    # HTTP surface
    allowed_origins: str = "*"
    request_timeout_seconds: int = 120
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry; exporter is console, otlp or none.
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = Field(1.0, ge=0.0, le=1.0)
    telemetry_environment: str = "development"

    @field_validator("admin_password")
    @classmethod
    def _admin_password_set(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("ADMIN_PASSWORD must not be empty")
        return value

    @field_validator("snipeit_url", "database_url")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise ValueError(f"{info.field_name.upper()} must not be empty")
        return value.strip()

    @property
    def snipeit_api_url(self) -> str:
        """Snipe-IT REST root, e.g. https://assets.example.com/api/v1."""
        return f"{self.snipeit_url.rstrip('/')}/api/v1"


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings; tests call get_settings.cache_clear() after changing env."""
    return Settings()
