from typing import Annotated, Any
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from app.domains.clinic_booking.domain.exceptions import MalformedTimeLabelException
from app.domains.clinic_booking.domain.services.slot_availability import WEEKDAY_NAMES
from app.domains.clinic_booking.domain.value_objects.time_label import TimeLabel

DEFAULT_WEEKDAYS = [0, 1, 2, 3, 4, 5]

DEFAULT_DOCTORS = ["Dr. Sarah Johnson", "Dr. Mike Chen", "Dr. James Wilson"]

DEFAULT_TIME_LABELS = [
    "8:00 AM",
    "8:30 AM",
    "9:00 AM",
    "9:30 AM",
    "10:00 AM",
    "10:30 AM",
    "11:00 AM",
    "11:30 AM",
    "1:00 PM",
    "1:30 PM",
    "2:00 PM",
    "2:30 PM",
    "3:00 PM",
    "3:30 PM",
    "4:00 PM",
    "4:30 PM",
    "5:00 PM",
    "5:30 PM",
]


class Settings(BaseSettings):
    """
    Application configuration using Pydantic BaseSettings.
    Values are loaded automatically from environment variables and `.env`.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Clinic Booking API"
    PROJECT_DESCRIPTION: str = "Appointment booking service for the dental clinic"
    VERSION: str = "0.1.0"

    # Application Settings
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    DEBUG: bool = Field(False, description="Enable debug mode")
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(default_factory=list, description="Allowed CORS origins outside debug mode")
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error reporting")

    # Storage
    STORAGE_BACKEND: str = Field("postgres", description="Appointment store: 'postgres' or 'memory'")

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("clinic", description="Database name")
    DB_USER: str = Field("postgres", description="Database user")
    DB_PASSWORD: str | None = Field(None, description="Database password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(20, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout to obtain a pooled connection")

    # Clinic operating template
    CLINIC_NAME: str = Field("Dental Clinic", description="Clinic name used in calendar exports")
    CLINIC_LOCATION: str = Field("Dental Clinic", description="Location text used in calendar exports")
    CLINIC_DOCTORS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_DOCTORS),
        description="Doctors that take bookings",
    )
    CLINIC_TIME_LABELS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_TIME_LABELS),
        description="Bookable start times as 12-hour labels",
    )
    CLINIC_WEEKDAYS: Annotated[list[int], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_WEEKDAYS),
        description="Operating weekdays as names (mon,tue,...) or numbers (0 is Monday)",
    )
    APPOINTMENT_DURATION_HOURS: int = Field(1, description="Fixed appointment length used for calendar exports")
    UPCOMING_SLOT_DAYS: int = Field(7, description="Days covered by the upcoming availability listing")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("CLINIC_DOCTORS", "CORS_ORIGINS", mode="before")
    @classmethod
    def parse_comma_separated(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("CLINIC_TIME_LABELS", mode="before")
    @classmethod
    def parse_time_labels(cls, value):
        """Accept a comma-separated string and normalize every label."""
        if isinstance(value, str):
            value = [item for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            try:
                return [str(TimeLabel.parse(item)) for item in value]
            except MalformedTimeLabelException as e:
                raise ValueError(f"Invalid CLINIC_TIME_LABELS entry: {e}") from e
        return value

    @field_validator("CLINIC_WEEKDAYS", mode="before")
    @classmethod
    def parse_weekdays(cls, value):
        """Accept 'mon,tue,...' or '0,1,...' and return sorted weekday numbers."""
        if isinstance(value, str):
            value = [item.strip() for item in value.split(",") if item.strip()]
        if not isinstance(value, list):
            return value
        weekdays = set()
        for item in value:
            name = str(item).strip().lower()[:3]
            if name in WEEKDAY_NAMES:
                weekdays.add(WEEKDAY_NAMES.index(name))
            elif name in ("0", "1", "2", "3", "4", "5", "6"):
                weekdays.add(int(name))
            else:
                raise ValueError(f"Invalid CLINIC_WEEKDAYS entry: {item!r}")
        if not weekdays:
            raise ValueError("CLINIC_WEEKDAYS must name at least one day")
        return sorted(weekdays)

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v):
        if v not in ("postgres", "memory"):
            raise ValueError("STORAGE_BACKEND must be 'postgres' or 'memory'")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        return v

    @field_validator("APPOINTMENT_DURATION_HOURS", "UPCOMING_SLOT_DAYS")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("Value must be a positive integer")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL (asyncpg driver)."""
        return self._build_url("postgresql+asyncpg")

    @computed_field
    @property
    def sync_database_url(self) -> str:
        """Sync SQLAlchemy URL used by Alembic migrations."""
        return self._build_url("postgresql+psycopg2")

    @property
    def is_development(self) -> bool:
        """Check if the app runs in a development environment."""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    def _build_url(self, driver: str) -> str:
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            credentials = f"{user}:{quote_plus(self.DB_PASSWORD)}"
        else:
            credentials = user
        return f"{driver}://{credentials}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


# Settings singleton
_settings_instance = None


def get_settings() -> Settings:
    """
    Return a cached settings instance.
    Avoids reloading environment variables on every call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
