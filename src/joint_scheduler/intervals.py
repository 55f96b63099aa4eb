"""
Interval generation from project and event records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, UTC
from enum import Enum

from .config import SchedulerConfig
from .exceptions import InvalidConfigurationError
from .models import EventType, SchedulerEvent, SchedulerProject, Weekday

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnotatedInterval:
    """Keyed ``[start, end)`` interval with the fields needed for weighting and conflicts.

    Intervals order by ``end``; the DP relies on that ordering.
    """

    key: str
    start: datetime
    end: datetime
    weight: int
    is_primary_user: bool
    is_group_project: bool
    max_full_weight_count: int

    def __lt__(self, other: AnnotatedInterval) -> bool:
        return self.end < other.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def cumulative_weight(self, count: int, decay_rate: float) -> float:
        """Total weight of ``count`` occurrences of this interval's key."""
        if count <= self.max_full_weight_count:
            return float(count * self.weight)
        total = float(self.max_full_weight_count * self.weight)
        coefficient = decay_rate
        for _ in range(count - self.max_full_weight_count):
            total += coefficient * self.weight
            coefficient *= decay_rate
        return total

    def incremental_weight(self, count: int, decay_rate: float) -> float:
        """Weight added by the ``count``-th occurrence."""
        return self.cumulative_weight(count, decay_rate) - self.cumulative_weight(
            count - 1, decay_rate
        )


class ContainerKind(str, Enum):
    PROJECT = "project"
    EVENT = "event"


@dataclass(frozen=True, eq=False)
class IntervalContainer:
    """A project or event record owned by one user, able to expand into intervals."""

    key: str
    is_primary_user: bool
    record: SchedulerProject | SchedulerEvent

    @property
    def kind(self) -> ContainerKind:
        if isinstance(self.record, SchedulerProject):
            return ContainerKind.PROJECT
        return ContainerKind.EVENT

    @property
    def title(self) -> str:
        return self.record.title

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, IntervalContainer):
            return self.key == other.key
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.key)

    @classmethod
    def for_project(cls, project: SchedulerProject, is_primary_user: bool) -> IntervalContainer:
        return cls(key=project.key, is_primary_user=is_primary_user, record=project)

    @classmethod
    def for_event(cls, event: SchedulerEvent, is_primary_user: bool) -> IntervalContainer:
        return cls(key=event.key, is_primary_user=is_primary_user, record=event)


def with_hour_offset(day: date, hour: int) -> datetime:
    """Return ``day`` at ``hour`` o'clock UTC, carrying whole days for hours outside 0-23."""
    standardized_hour = hour % 24
    days_to_add = (hour - standardized_hour) // 24
    return datetime.combine(day + timedelta(days=days_to_add), time(standardized_hour), tzinfo=UTC)


def validate_event_hours(event: SchedulerEvent) -> None:
    if event.end_hour <= event.start_hour:
        raise InvalidConfigurationError(
            f"end_hour {event.end_hour} must be after start_hour {event.start_hour}",
            key=event.key,
        )


def _project_intervals(
    container: IntervalContainer, now: datetime, horizon: datetime
) -> list[AnnotatedInterval]:
    project: SchedulerProject = container.record  # type: ignore[assignment]
    chunk = timedelta(hours=project.minimum_time_units)
    end = min(project.deadline, horizon)
    intervals = []
    while end > now:
        start = end - chunk
        intervals.append(
            AnnotatedInterval(
                key=container.key,
                start=start,
                end=end,
                weight=project.weight,
                is_primary_user=container.is_primary_user,
                is_group_project=project.is_group_project,
                max_full_weight_count=project.estimated_time_units,
            )
        )
        end = start
    intervals.reverse()
    return intervals


def _event_interval(
    container: IntervalContainer, day: date, config: SchedulerConfig
) -> AnnotatedInterval:
    event: SchedulerEvent = container.record  # type: ignore[assignment]
    return AnnotatedInterval(
        key=container.key,
        start=with_hour_offset(day, event.start_hour),
        end=with_hour_offset(day, event.end_hour),
        weight=config.event_weight,
        is_primary_user=container.is_primary_user,
        is_group_project=False,
        max_full_weight_count=config.event_max_full_weight_count,
    )


def _event_intervals(
    container: IntervalContainer, now: datetime, horizon: datetime, config: SchedulerConfig
) -> list[AnnotatedInterval]:
    event: SchedulerEvent = container.record  # type: ignore[assignment]
    validate_event_hours(event)

    if event.type == EventType.ONE_TIME:
        event_time: datetime = event.repeat_config  # type: ignore[assignment]
        if not now <= event_time <= horizon:
            return []
        return [_event_interval(container, event_time.date(), config)]

    weekdays: frozenset[Weekday] = event.repeat_config  # type: ignore[assignment]
    today = now.date()
    day = horizon.date()
    intervals = []
    while day >= today:
        if Weekday.of(day) in weekdays:
            interval = _event_interval(container, day, config)
            # Past occurrences cannot be rescheduled; later ones fall outside the horizon
            if interval.start >= now and interval.end <= horizon:
                intervals.append(interval)
        day -= timedelta(days=1)
    intervals.reverse()
    return intervals


def generate_intervals(
    container: IntervalContainer,
    now: datetime,
    horizon: datetime,
    config: SchedulerConfig | None = None,
) -> list[AnnotatedInterval]:
    """
    Expand a container into its intervals between ``now`` and ``horizon``.

    Args:
        container: Project or event container
        now: Sampled current time (UTC)
        horizon: Latest time any interval may be generated for
        config: Engine parameters (event weights)

    Returns:
        Intervals in chronological order

    Raises:
        InvalidConfigurationError: If an event's hours cannot form an interval
    """
    if config is None:
        config = SchedulerConfig()

    if container.kind == ContainerKind.PROJECT:
        intervals = _project_intervals(container, now, horizon)
    else:
        intervals = _event_intervals(container, now, horizon, config)

    logger.debug(
        f"Generated {len(intervals)} intervals for {container.kind.value} {container.key}"
    )
    return intervals
