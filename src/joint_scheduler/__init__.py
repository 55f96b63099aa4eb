"""
Joint Scheduler Package

Weighted interval scheduling of projects and events for one or two users.
"""

from .api import schedule_api, validate_schedule_request
from .config import SchedulerConfig, SchedulerSettings
from .core import Scheduler, schedule
from .exceptions import InternalConsistencyError, InvalidConfigurationError, SchedulerError
from .models import (
    EventType,
    SchedulerData,
    SchedulerEvent,
    SchedulerProject,
    TaggedInterval,
    TaggedIntervalType,
    Weekday,
)

__version__ = "0.1.0"
__all__ = [
    "schedule",
    "schedule_api",
    "validate_schedule_request",
    "Scheduler",
    "SchedulerConfig",
    "SchedulerSettings",
    "SchedulerData",
    "SchedulerEvent",
    "SchedulerProject",
    "EventType",
    "Weekday",
    "TaggedInterval",
    "TaggedIntervalType",
    "SchedulerError",
    "InvalidConfigurationError",
    "InternalConsistencyError",
]
