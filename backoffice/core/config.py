"""Service settings.

Everything configurable lives on Settings, read from the environment and
an optional .env file via pydantic-settings. Nothing is read at import;
get_settings() loads and validates on first call.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings (names are case-insensitive env vars).

    SECRET_KEY is mandatory; DISCORD_ROLE_MAP keys must be role names and
    DISCORD_DEPARTMENT_MAP keys non-reserved department names.
    """

    # App
    app_name: str = "community-backoffice"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str | None = None

    # Database (SQLAlchemy async + Alembic). Empty URL = SQL not configured.
    database_url: str = ""
    database_echo: bool = False
    # Pool and driver overrides; None keeps the defaults in database.py
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security: bearer tokens are issued by the sign-in service; we only verify.
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Discord guild (external community platform)
    discord_api_base: str = "https://discord.com/api/v10"
    discord_guild_id: str = ""
    discord_bot_token: SecretStr | None = None
    discord_timeout_seconds: float = 10.0
    # Role name -> Discord role id, e.g. {"STAFF": "1209852842727313438"}.
    # Priority between matches follows the internal role hierarchy.
    discord_role_map: dict[str, str] = Field(default_factory=dict)
    # Department name -> Discord role id, e.g. {"BSO": "1209..."}. LEADERSHIP
    # and DEV are assigned by hand and may not appear here.
    discord_department_map: dict[str, str] = Field(default_factory=dict)
    # 429 handling: sleep min(retry_after, max_wait) + margin, then retry once.
    discord_rate_limit_max_wait_seconds: float = 30.0
    discord_rate_limit_margin_seconds: float = 0.5

    # Bulk role sync
    role_sync_batch_size: int = 5
    role_sync_batch_pause_seconds: float = 1.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and the Discord role and department map keys."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.role_sync_batch_size < 1:
            raise ValueError("ROLE_SYNC_BATCH_SIZE must be at least 1")
        # Imported here so config stays importable on its own.
        from backoffice.application.services.permission_engine import RESERVED_DEPARTMENTS
        from backoffice.domain.enums import Department, Role

        unknown = [k for k in self.discord_role_map if k not in Role.values()]
        if unknown:
            raise ValueError(
                f"DISCORD_ROLE_MAP has unknown role names: {sorted(unknown)!r}"
            )
        invalid = [
            k
            for k in self.discord_department_map
            if k not in Department.values() or Department(k) in RESERVED_DEPARTMENTS
        ]
        if invalid:
            raise ValueError(
                f"DISCORD_DEPARTMENT_MAP has unknown or reserved departments: {sorted(invalid)!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, built and validated on first call.

    Tests that change env vars call get_settings.cache_clear() first.
    """
    return Settings()
