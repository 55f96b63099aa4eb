"""
Data models for joint scheduling using Pydantic.
"""

from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Weekday(str, Enum):
    """Day of week, indexed like ``date.weekday()`` (Monday is 0)."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def number(self) -> int:
        return list(Weekday).index(self)

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]

    @classmethod
    def from_bitmask(cls, mask: int) -> frozenset["Weekday"]:
        """Decode a bitmask where bit ``i`` selects the weekday with index ``i``."""
        return frozenset(day for i, day in enumerate(cls) if mask & (1 << i))


class EventType(str, Enum):
    """Event recurrence classification."""
    ONE_TIME = "one_time"
    RECURRING = "recurring"


class TaggedIntervalType(str, Enum):
    """Kind of record a scheduled interval came from."""
    PROJECT = "project"
    EVENT = "event"


class SchedulerProject(BaseModel):
    """Flexible, deadline-bound work item."""

    key: str = Field(..., min_length=1, description="Unique project identifier")
    title: str = Field(..., description="Project title")
    deadline: datetime = Field(..., description="Absolute deadline")
    minimum_time_units: int = Field(..., gt=0, description="Smallest schedulable chunk in hours")
    estimated_time_units: int = Field(
        ..., ge=0, description="Number of chunks expected to need full weight"
    )
    weight: int = Field(..., ge=0, description="Priority value of one chunk")
    is_group_project: bool = Field(False, description="Shared between both users")
    is_completed: bool = Field(False, description="Completed projects are never scheduled")

    model_config = ConfigDict(frozen=True)

    @field_validator("deadline")
    @classmethod
    def normalize_deadline(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class SchedulerEvent(BaseModel):
    """Fixed or recurring calendar block."""

    key: str = Field(..., min_length=1, description="Unique event identifier")
    title: str = Field(..., description="Event title")
    type: EventType = Field(..., description="One-time or recurring")
    start_hour: int = Field(..., description="Start hour offset from the day's midnight")
    end_hour: int = Field(..., description="End hour offset from the day's midnight")
    repeat_config: datetime | frozenset[Weekday] = Field(
        ..., description="Event date for one-time events, weekdays for recurring events"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def decode_repeat_config(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        event_type = data.get("type")
        repeat_config = data.get("repeat_config")
        if event_type in (EventType.RECURRING, EventType.RECURRING.value):
            if isinstance(repeat_config, int) and not isinstance(repeat_config, bool):
                data = {**data, "repeat_config": Weekday.from_bitmask(repeat_config)}
            elif isinstance(repeat_config, (list, tuple, set, frozenset)):
                data = {**data, "repeat_config": frozenset(
                    Weekday(day.lower()) if isinstance(day, str) else day
                    for day in repeat_config
                )}
        return data

    @field_validator("repeat_config")
    @classmethod
    def normalize_event_date(cls, v: datetime | frozenset[Weekday]) -> datetime | frozenset[Weekday]:
        return ensure_utc(v) if isinstance(v, datetime) else v

    @model_validator(mode="after")
    def check_repeat_config_matches_type(self) -> "SchedulerEvent":
        if self.type == EventType.ONE_TIME:
            if not isinstance(self.repeat_config, datetime):
                raise ValueError("One-time events require a datetime repeat_config")
        elif isinstance(self.repeat_config, datetime):
            raise ValueError("Recurring events require a set of weekdays as repeat_config")
        return self

    @field_serializer("repeat_config")
    def serialize_repeat_config(self, value: datetime | frozenset[Weekday]) -> str | list[str]:
        if isinstance(value, datetime):
            return value.isoformat()
        return [day.value for day in sorted(value, key=lambda d: d.number)]


class SchedulerData(BaseModel):
    """Per-user bundle of projects and events."""

    projects: list[SchedulerProject] = Field(default_factory=list)
    events: list[SchedulerEvent] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "SchedulerData":
        return cls()


class TaggedInterval(BaseModel):
    """Scheduled interval as presented to the user."""

    type: TaggedIntervalType
    title: str
    start: datetime
    end: datetime

    model_config = ConfigDict(frozen=True)

    @field_serializer("start", "end")
    def serialize_times(self, value: datetime) -> str:
        return value.isoformat()
