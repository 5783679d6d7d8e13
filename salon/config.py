# salon/config.py

from dataclasses import dataclass
from datetime import time
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

BASE_DIR = Path(__file__).resolve().parents[1]

# Collections of the document store
RESERVATIONS_COLLECTION = "reservations"
EMPLOYEES_COLLECTION = "employees"
SERVICES_COLLECTION = "services"
CUSTOMERS_COLLECTION = "customers"

COLLECTIONS = (
    RESERVATIONS_COLLECTION,
    EMPLOYEES_COLLECTION,
    SERVICES_COLLECTION,
    CUSTOMERS_COLLECTION,
)


class Settings(BaseSettings):
    database_url: str = "sqlite:///./salon.db"
    secret_key: str = "change-me-later"
    access_token_expire_minutes: int = 30
    log_level: str = "INFO"

    # Agenda
    min_step: int = 15
    max_service_duration: int = 3 * 60
    opening_time: time = time(8, 0)
    closing_time: time = time(20, 0)

    model_config = SettingsConfigDict(
        env_prefix="SALON_",
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )


@dataclass(frozen=True)
class SchedulingConfig:
    """
    Agenda constants, loaded once at startup.

    Attributes:
        min_step: Minimum subdivision of the agenda in minutes, a divisor of 60
        max_service_duration: Duration in minutes of the longest service offered
        opening_time: First bookable time of the business day
        closing_time: Last grid boundary of the business day
    """
    min_step: int = 15
    max_service_duration: int = 3 * 60
    opening_time: time = time(8, 0)
    closing_time: time = time(20, 0)

    def __post_init__(self):
        if self.min_step <= 0 or 60 % self.min_step != 0:
            raise ConfigurationError(f"min_step must be a divisor of 60, got {self.min_step}")
        if self.max_service_duration < self.min_step:
            raise ConfigurationError(
                f"max_service_duration ({self.max_service_duration}) is shorter than min_step ({self.min_step})"
            )
        if self.opening_minutes >= self.closing_minutes:
            raise ConfigurationError("opening_time must come before closing_time")
        if (self.closing_minutes - self.opening_minutes) % self.min_step != 0:
            raise ConfigurationError(
                f"business day {self.opening_time:%H:%M}-{self.closing_time:%H:%M} "
                f"is not a multiple of {self.min_step} minutes"
            )

    @property
    def opening_minutes(self) -> int:
        return self.opening_time.hour * 60 + self.opening_time.minute

    @property
    def closing_minutes(self) -> int:
        return self.closing_time.hour * 60 + self.closing_time.minute

    @classmethod
    def from_settings(cls, settings: Settings) -> "SchedulingConfig":
        return cls(
            min_step=settings.min_step,
            max_service_duration=settings.max_service_duration,
            opening_time=settings.opening_time,
            closing_time=settings.closing_time,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_scheduling_config() -> SchedulingConfig:
    return SchedulingConfig.from_settings(get_settings())
