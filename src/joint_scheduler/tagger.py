"""
Convert selected intervals into user-facing tagged intervals.
"""

import logging
from collections.abc import Iterable, Mapping

from .exceptions import InternalConsistencyError
from .intervals import AnnotatedInterval, ContainerKind, IntervalContainer
from .models import TaggedInterval, TaggedIntervalType

logger = logging.getLogger(__name__)


def merge_adjacent_intervals(intervals: list[TaggedInterval]) -> list[TaggedInterval]:
    """Collapse consecutive intervals of the same subject that touch exactly.

    ``intervals`` must already be sorted by start.
    """
    merged: list[TaggedInterval] = []
    for interval in intervals:
        if merged:
            previous = merged[-1]
            if (
                previous.type == interval.type
                and previous.title == interval.title
                and previous.end == interval.start
            ):
                merged[-1] = previous.model_copy(update={"end": interval.end})
                continue
        merged.append(interval)
    return merged


def tag_intervals(
    intervals: Iterable[AnnotatedInterval], containers: Mapping[str, IntervalContainer]
) -> list[TaggedInterval]:
    """
    Tag selected intervals with their source record's type and title.

    Args:
        intervals: Intervals selected for one user
        containers: Key → container map the intervals were generated from

    Returns:
        Tagged intervals sorted by start with adjacent same-subject intervals merged

    Raises:
        InternalConsistencyError: If an interval's key has no container
    """
    tagged = []
    for interval in intervals:
        container = containers.get(interval.key)
        if container is None:
            logger.error(f"Selected interval references unknown container {interval.key}")
            raise InternalConsistencyError(f"No container for interval key: {interval.key}")
        tagged.append(
            TaggedInterval(
                type=(
                    TaggedIntervalType.PROJECT
                    if container.kind == ContainerKind.PROJECT
                    else TaggedIntervalType.EVENT
                ),
                title=container.title,
                start=interval.start,
                end=interval.end,
            )
        )
    tagged.sort(key=lambda tagged_interval: tagged_interval.start)
    return merge_adjacent_intervals(tagged)
