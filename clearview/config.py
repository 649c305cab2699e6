"""Application configuration with environment variable validation."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

# min_lon, min_lat, max_lon, max_lat
SEATTLE_VIEWBOX = "-122.44,47.50,-122.15,47.73"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (empty -> in-memory demo store)
    supabase_url: str = Field(default="", validation_alias="SUPABASE_URL")
    supabase_key: str = Field(default="", validation_alias="SUPABASE_KEY")

    # Geocoding
    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        validation_alias="NOMINATIM_BASE_URL",
    )
    geocode_viewbox: str = Field(
        default=SEATTLE_VIEWBOX, validation_alias="GEOCODE_VIEWBOX"
    )
    geocode_user_agent: str = Field(
        default="ClearViewWipers/1.0", validation_alias="GEOCODE_USER_AGENT"
    )
    geocode_timeout: float = Field(default=10.0, validation_alias="GEOCODE_TIMEOUT")

    # Auth
    admin_pin: str = Field(default="1313", validation_alias="ADMIN_PIN")

    # Business defaults
    default_unit_cost: float = Field(default=7.0, validation_alias="DEFAULT_UNIT_COST")
    default_job_price: float = Field(default=50.0, validation_alias="DEFAULT_JOB_PRICE")

    # Photo identification
    photo_id_delay_seconds: float = Field(
        default=2.0, validation_alias="PHOTO_ID_DELAY_SECONDS"
    )

    # API settings
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    rate_limit_suggest: str = Field(
        default="60/minute", validation_alias="RATE_LIMIT_SUGGEST"
    )
    allowed_origins: list[str] = Field(
        default=["*"],
        validation_alias="ALLOWED_ORIGINS",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse ALLOWED_ORIGINS from comma-separated string or return list."""
        if isinstance(self.allowed_origins, str):
            return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return self.allowed_origins

    @property
    def use_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()  # type: ignore[call-arg]


def validate_settings() -> None:
    """Validate settings that must hold together."""
    settings = get_settings()
    errors = []

    if bool(settings.supabase_url) != bool(settings.supabase_key):
        errors.append("SUPABASE_URL and SUPABASE_KEY must be set together")
    if not settings.admin_pin.strip():
        errors.append("ADMIN_PIN must not be blank")
    if settings.default_unit_cost < 0:
        errors.append("DEFAULT_UNIT_COST must be >= 0")

    if errors:
        raise ValueError(f"Configuration errors: {'; '.join(errors)}")
