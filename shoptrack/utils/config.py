# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class SupabaseSettings(BaseSettings):
    """Hosted backend settings (auth + REST data API).

    The anon key identifies the project; the access token, when present,
    identifies the signed-in shopper whose id is attached to activity events.
    """

    model_config = SettingsConfigDict(env_prefix="SUPABASE_")

    url: str = Field(default="http://localhost:54321", description="Project URL")
    anon_key: str = Field(default="", description="Public anon API key")
    access_token: Optional[str] = Field(
        default=None, description="JWT of the signed-in user (None for anonymous visitors)"
    )
    activity_table: str = Field(default="user_activity", description="Activity table name")
    timeout_seconds: float = Field(default=5.0, description="HTTP timeout for API calls")

    @property
    def is_configured(self) -> bool:
        """Check if the hosted backend is configured."""
        return bool(self.url and self.anon_key)

    @property
    def rest_url(self) -> str:
        """Base URL of the REST data API."""
        return f"{self.url.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        """Base URL of the auth API."""
        return f"{self.url.rstrip('/')}/auth/v1"


class PostgresSettings(BaseSettings):
    """PostgreSQL connection settings (direct access to the storefront database)."""

    model_config = SettingsConfigDict(env_prefix="PG_")

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL username")
    password: str = Field(default="postgres", description="PostgreSQL password")
    database: str = Field(default="postgres", description="Database name")
    schema_name: str = Field(default="public", description="Schema name")
    sslmode: str = Field(default="prefer", description="SSL mode")

    @property
    def connection_string(self) -> str:
        """Build PostgreSQL connection string."""
        return (
            f"postgresql://{self.user}:{self.password}@"
            f"{self.host}:{self.port}/{self.database}?sslmode={self.sslmode}"
        )


class TrackingSettings(BaseSettings):
    """Activity tracking pipeline settings."""

    model_config = SettingsConfigDict(env_prefix="TRACKING_")

    sink: Literal["supabase", "postgresql", "log"] = Field(
        default="supabase",
        description="Event sink implementation (supabase, postgresql, log)",
    )
    identity: Literal["supabase", "anonymous"] = Field(
        default="supabase",
        description="Identity provider implementation (supabase, anonymous)",
    )
    dispatch: Literal["background", "inline"] = Field(
        default="background",
        description="Emission dispatch mode (background thread or inline)",
    )
    origin: str = Field(default="http://localhost:8080", description="Storefront origin")
    beacon_path: str = Field(default="/beacon", description="Path of the unload beacon endpoint")
    beacon_timeout_seconds: float = Field(
        default=1.0, description="Timeout for the unload beacon POST"
    )
    marker_attribute: str = Field(
        default="data-track", description="Attribute that opts an element into click tracking"
    )
    meta_attribute: str = Field(
        default="data-track-meta", description="Attribute holding the JSON click payload"
    )

    @property
    def beacon_url(self) -> str:
        """Absolute URL of the unload beacon endpoint."""
        return f"{self.origin.rstrip('/')}{self.beacon_path}"


class AnalyticsSettings(BaseSettings):
    """Admin dashboard analytics settings."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    activity_limit: int = Field(default=100, description="Number of recent activities to load")
    top_products: int = Field(default=5, description="Number of top products to show")
    recent_window_hours: int = Field(
        default=24, description="Window for the 'recent events' counter in hours"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    postgres: PostgresSettings = Field(default_factory=PostgresSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
