from datetime import timedelta
from dataclasses import dataclass, field

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class SchedulerConfig:
    """Engine parameters threaded explicitly into every scheduling call."""

    horizon: timedelta = field(default_factory=lambda: timedelta(days=14))
    decay_rate: float = 2.0 / 3
    # Large enough that an event always beats any project it does not collide with
    event_weight: int = 1_000_000_000
    event_max_full_weight_count: int = 1_000_000_000
    max_workers: int = 4


class SchedulerSettings(BaseSettings):
    """Scheduler settings loaded from the environment"""

    horizon_days: int = Field(default=14, gt=0, description="Scheduling lookahead in days")
    decay_rate: float = Field(
        default=2.0 / 3,
        gt=0,
        lt=1,
        description="Weight decay per occurrence past the estimated count",
    )
    event_weight: int = Field(default=1_000_000_000, gt=0)
    event_max_full_weight_count: int = Field(default=1_000_000_000, gt=0)
    max_workers: int = Field(
        default=4, ge=1, description="Worker threads used for interval generation"
    )

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def to_config(self) -> SchedulerConfig:
        return SchedulerConfig(
            horizon=timedelta(days=self.horizon_days),
            decay_rate=self.decay_rate,
            event_weight=self.event_weight,
            event_max_full_weight_count=self.event_max_full_weight_count,
            max_workers=self.max_workers,
        )
