from datetime import datetime, timedelta, UTC

import pytest

from joint_scheduler.models import EventType, SchedulerEvent, SchedulerProject

# Monday morning
NOW = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_project():
    """Factory for projects with sensible defaults relative to NOW."""

    def _make(key: str = "p1", **overrides) -> SchedulerProject:
        data = {
            "key": key,
            "title": f"Project {key}",
            "deadline": NOW + timedelta(hours=10),
            "minimum_time_units": 2,
            "estimated_time_units": 2,
            "weight": 10,
        }
        data.update(overrides)
        return SchedulerProject(**data)

    return _make


@pytest.fixture
def make_event():
    """Factory for events; recurring on Mondays 9-17 by default."""

    def _make(key: str = "e1", **overrides) -> SchedulerEvent:
        data = {
            "key": key,
            "title": f"Event {key}",
            "type": EventType.RECURRING,
            "start_hour": 9,
            "end_hour": 17,
            "repeat_config": ["monday"],
        }
        data.update(overrides)
        return SchedulerEvent(**data)

    return _make
