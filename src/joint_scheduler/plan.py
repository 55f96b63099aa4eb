from __future__ import annotations

from dataclasses import dataclass, field

from .intervals import AnnotatedInterval
from .persistent import FpList, FpMap

DEFAULT_DECAY_RATE = 2.0 / 3


@dataclass(frozen=True)
class Plan:
    """One user's selected intervals, most recent first.

    ``occurrences`` and ``total_weight`` must stay in sync with ``intervals``.
    """

    intervals: FpList[AnnotatedInterval] = field(default_factory=FpList.empty)
    occurrences: FpMap[str, int] = field(default_factory=FpMap.empty)
    total_weight: float = 0.0
    decay_rate: float = DEFAULT_DECAY_RATE

    @property
    def latest(self) -> AnnotatedInterval | None:
        return None if self.intervals.is_empty else self.intervals.head

    def can_add(self, interval: AnnotatedInterval) -> bool:
        latest = self.latest
        return latest is None or latest.end <= interval.start

    def with_interval(self, interval: AnnotatedInterval) -> Plan | None:
        """Return the plan extended by ``interval``, or None if it would overlap."""
        if not self.can_add(interval):
            return None
        old_count = self.occurrences.get(interval.key, 0)
        new_count = old_count + 1
        new_weight = (
            self.total_weight
            - interval.cumulative_weight(old_count, self.decay_rate)
            + interval.cumulative_weight(new_count, self.decay_rate)
        )
        return Plan(
            intervals=self.intervals.cons(interval),
            occurrences=self.occurrences.put(interval.key, new_count),
            total_weight=new_weight,
            decay_rate=self.decay_rate,
        )

    def chronological(self) -> list[AnnotatedInterval]:
        return list(self.intervals.reverse())

    def __repr__(self) -> str:
        return (
            f"Plan(intervals={len(self.intervals)}, "
            f"occurrences={dict(self.occurrences.items())}, weight={self.total_weight})"
        )


@dataclass(frozen=True)
class PlanPair:
    """The primary user's and the secondary user's plans, optimized jointly."""

    primary: Plan = field(default_factory=Plan)
    secondary: Plan = field(default_factory=Plan)

    @classmethod
    def empty(cls, decay_rate: float = DEFAULT_DECAY_RATE) -> PlanPair:
        plan = Plan(decay_rate=decay_rate)
        return cls(primary=plan, secondary=plan)

    @property
    def total_weight(self) -> float:
        return self.primary.total_weight + self.secondary.total_weight

    def with_interval(self, interval: AnnotatedInterval) -> PlanPair | None:
        """Add ``interval`` to every plan it belongs to; group intervals need both."""
        if interval.is_group_project:
            primary = self.primary.with_interval(interval)
            if primary is None:
                return None
            secondary = self.secondary.with_interval(interval)
            if secondary is None:
                return None
            return PlanPair(primary=primary, secondary=secondary)
        if interval.is_primary_user:
            primary = self.primary.with_interval(interval)
            if primary is None:
                return None
            return PlanPair(primary=primary, secondary=self.secondary)
        secondary = self.secondary.with_interval(interval)
        if secondary is None:
            return None
        return PlanPair(primary=self.primary, secondary=secondary)


def create_plan_pair(
    interval: AnnotatedInterval, decay_rate: float = DEFAULT_DECAY_RATE
) -> PlanPair:
    """Build the singleton plan pair holding only ``interval``."""
    empty = Plan(decay_rate=decay_rate)
    plan = empty.with_interval(interval)
    if interval.is_group_project:
        return PlanPair(primary=plan, secondary=plan)
    if interval.is_primary_user:
        return PlanPair(primary=plan, secondary=empty)
    return PlanPair(primary=empty, secondary=plan)
