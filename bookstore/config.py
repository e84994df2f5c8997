"""
Application Configuration Module

Type-safe configuration with Pydantic Settings.

Values come from environment variables first and fall back to a `.env`
file in the working directory. Everything is validated when the Settings
object is built, so a malformed or incomplete configuration fails at
startup instead of on the first request.

Usage:
    from bookstore.config import get_settings

    settings = get_settings()
    print(settings.app_name)
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The database is described either by a full DATABASE_URL or by its
    parts (DB_HOST, DB_PORT, DB_USER, DB_PASS, DB_NAME). The parts are
    only required when the SQL storage backend is selected and no URL
    is given.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Bookstore API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo, detailed 500 errors)"
    )
    app_address: str = Field(
        default="0.0.0.0:8080",
        description="Listen address as host:port (':8080' binds all interfaces)"
    )
    api_prefix: str = Field(
        default="",
        description="URL prefix for the books router, e.g. '/api/v1'"
    )

    # -------------------------------------------------------------------------
    # Storage Settings
    # -------------------------------------------------------------------------
    storage_backend: Literal["sql", "memory"] = Field(
        default="sql",
        description="Where book records live: a relational table or process memory"
    )
    soft_delete: bool = Field(
        default=True,
        description="SQL deletes stamp deleted_at instead of removing the row"
    )
    auto_migrate: bool = Field(
        default=True,
        description="Create the books table at startup if it does not exist"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* parts"
    )
    db_driver: str = Field(
        default="postgresql+psycopg2",
        description="SQLAlchemy dialect and driver"
    )
    db_host: str | None = Field(default=None, description="Database host")
    db_port: int | None = Field(default=None, description="Database port")
    db_user: str | None = Field(default=None, description="Database user")
    db_pass: str | None = Field(default=None, description="Database password")
    db_name: str | None = Field(default=None, description="Database name")
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )

    # -------------------------------------------------------------------------
    # HTTP Settings
    # -------------------------------------------------------------------------
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def host(self) -> str:
        """Host part of app_address; an empty host means all interfaces."""
        host = self.app_address.rsplit(":", 1)[0]
        return host or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.app_address.rsplit(":", 1)[1])

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept any standard logging level name, case-insensitively."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("app_address")
    @classmethod
    def validate_app_address(cls, v: str) -> str:
        """
        Validate the listen address.

        Accepts "host:port" and ":port". The port must be an integer
        between 1 and 65535.
        """
        if ":" not in v:
            raise ValueError("app_address must look like 'host:port' or ':port'")

        port = v.rsplit(":", 1)[1]
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"app_address has an invalid port: {port!r}")
        return v

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalize the prefix to '' or '/segment' without a trailing slash."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @model_validator(mode="after")
    def require_database_settings(self) -> "Settings":
        """The SQL backend needs either DATABASE_URL or every DB_* part."""
        if self.storage_backend != "sql" or self.database_url:
            return self

        missing = [
            name.upper()
            for name in ("db_host", "db_port", "db_user", "db_pass", "db_name")
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(
                "SQL storage needs DATABASE_URL or these settings: "
                + ", ".join(missing)
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The .env file is read once; every caller shares the same instance.
    Raises pydantic.ValidationError when the configuration is invalid.
    """
    return Settings()
