#parking_simulator\simulation\config.py

from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from parking_simulator.lot.config import LotConfig

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SimulationSettings(BaseSettings):
    """Simulation configuration from environment variables (PARKING_*)."""

    model_config = SettingsConfigDict(
        env_prefix="PARKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
        case_sensitive=False,
        extra="ignore"
    )

    # Lot
    capacity: int = Field(default=20, gt=0)

    # Arrivals (rate in vehicles per second); PARKING_TOTAL_CARS=none is unbounded
    total_cars: Optional[int] = Field(default=100, gt=0)
    arrival_rate: float = Field(default=4.0, gt=0)

    # Dwell time range (seconds)
    dwell_min: float = Field(default=3.0, ge=0)
    dwell_max: float = Field(default=5.0, ge=0)

    # Status reporter
    report_interval: float = Field(default=0.7, gt=0)

    log_level: LogLevel = "INFO"
    seed: Optional[int] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _check_dwell_range(self):
        if self.dwell_max < self.dwell_min:
            raise ValueError(
                f"dwell_max ({self.dwell_max}) must be >= dwell_min ({self.dwell_min})"
            )
        return self

    def lot_config(self) -> LotConfig:
        return LotConfig(
            capacity=self.capacity,
            dwell_min=self.dwell_min,
            dwell_max=self.dwell_max,
        )
