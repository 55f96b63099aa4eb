"""
Merge two users' records into one set of interval containers.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from .exceptions import InternalConsistencyError, InvalidConfigurationError
from .intervals import IntervalContainer, validate_event_hours
from .models import SchedulerData, SchedulerEvent, SchedulerProject

logger = logging.getLogger(__name__)


def _average(first: int, second: int) -> int:
    return (first + second) // 2


def reconcile_group_projects(projects: list[IntervalContainer]) -> list[IntervalContainer]:
    """
    Reconcile the group projects that share one title.

    Args:
        projects: Group project containers with the same title, from either user

    Returns:
        Containers to schedule: one merged group project when both users declared
        it, otherwise ordinary projects of their owners

    Raises:
        InvalidConfigurationError: If more than two records share the title
    """
    owners = {container.is_primary_user for container in projects}
    if len(projects) > 2:
        title = projects[0].title
        raise InvalidConfigurationError(
            f"{len(projects)} group projects share the title '{title}', at most 2 are allowed"
        )

    if len(projects) < 2 or len(owners) < 2:
        downgraded = []
        for container in projects:
            logger.warning(
                f"Group project {container.key} has no counterpart, scheduling it individually"
            )
            project = container.record.model_copy(update={"is_group_project": False})
            downgraded.append(IntervalContainer.for_project(project, container.is_primary_user))
        return downgraded

    first, second = sorted(projects, key=lambda container: not container.is_primary_user)
    fo: SchedulerProject = first.record  # type: ignore[assignment]
    so: SchedulerProject = second.record  # type: ignore[assignment]
    reconciled = fo.model_copy(
        update={
            "minimum_time_units": _average(fo.minimum_time_units, so.minimum_time_units),
            "estimated_time_units": _average(fo.estimated_time_units, so.estimated_time_units),
            "weight": _average(fo.weight, so.weight),
        }
    )
    logger.debug(f"Merged group project '{fo.title}' from {fo.key} and {so.key}")
    return [IntervalContainer.for_project(reconciled, is_primary_user=True)]


def build_container_map(containers: Iterable[IntervalContainer]) -> dict[str, IntervalContainer]:
    """Reduce containers into a key lookup map, rejecting duplicate keys."""
    container_map: dict[str, IntervalContainer] = {}
    for container in containers:
        if container.key in container_map:
            logger.error(f"Duplicate container key after merge: {container.key}")
            raise InternalConsistencyError(f"Duplicate container key: {container.key}")
        container_map[container.key] = container
    return container_map


class Merger:
    """Merges the raw data of the primary and the secondary user."""

    def __init__(self, config1: SchedulerData, config2: SchedulerData):
        self.config1 = config1
        self.config2 = config2
        self._merged: list[IntervalContainer] = []
        self._tentative_group_projects: list[IntervalContainer] = []

    def _classify_projects(self, projects: list[SchedulerProject], is_primary_user: bool) -> None:
        for project in projects:
            if project.is_completed:
                continue
            container = IntervalContainer.for_project(project, is_primary_user)
            if project.is_group_project:
                self._tentative_group_projects.append(container)
            else:
                self._merged.append(container)

    def _process_events(self, events: list[SchedulerEvent], is_primary_user: bool) -> None:
        for event in events:
            validate_event_hours(event)
            self._merged.append(IntervalContainer.for_event(event, is_primary_user))

    def merge(self) -> dict[str, IntervalContainer]:
        self._merged = []
        self._tentative_group_projects = []

        self._classify_projects(self.config1.projects, is_primary_user=True)
        self._classify_projects(self.config2.projects, is_primary_user=False)
        self._process_events(self.config1.events, is_primary_user=True)
        self._process_events(self.config2.events, is_primary_user=False)

        by_title: dict[str, list[IntervalContainer]] = defaultdict(list)
        for container in self._tentative_group_projects:
            by_title[container.title].append(container)
        for group in by_title.values():
            self._merged.extend(reconcile_group_projects(group))

        container_map = build_container_map(self._merged)
        logger.info(
            f"Merged {len(container_map)} containers "
            f"({len(self._tentative_group_projects)} group project records)"
        )
        return container_map


def merge_configs(
    config1: SchedulerData, config2: SchedulerData | None = None
) -> dict[str, IntervalContainer]:
    """Merge the primary and the optional secondary user's data into a key → container map."""
    return Merger(config1, config2 or SchedulerData.empty()).merge()
