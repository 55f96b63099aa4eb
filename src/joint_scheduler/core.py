"""
Core joint scheduling using weighted interval scheduling.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, UTC

from .config import SchedulerConfig
from .intervals import AnnotatedInterval, IntervalContainer, generate_intervals
from .merger import merge_configs
from .models import SchedulerData, TaggedInterval, ensure_utc
from .plan import PlanPair, create_plan_pair
from .tagger import tag_intervals

logger = logging.getLogger(__name__)


class Scheduler:
    """Schedules the projects and events of one or two users.

    ``config1`` belongs to the primary user. ``config2`` can be omitted to
    schedule for the primary user alone.
    """

    def __init__(
        self,
        config1: SchedulerData,
        config2: SchedulerData | None = None,
        *,
        now: datetime | None = None,
        config: SchedulerConfig | None = None,
    ):
        self.config = config or SchedulerConfig()
        # Sampled once so every step sees the same clock
        self.now = ensure_utc(now) if now is not None else datetime.now(UTC)
        self.horizon = self.now + self.config.horizon

        self.containers = merge_configs(config1, config2)
        self.intervals = self._prepare_intervals()

    def _generate(self, container: IntervalContainer) -> list[AnnotatedInterval]:
        return generate_intervals(container, self.now, self.horizon, self.config)

    def _prepare_intervals(self) -> list[AnnotatedInterval]:
        """Generate every container's intervals, sorted by end time."""
        containers = list(self.containers.values())
        if self.config.max_workers > 1 and len(containers) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                generated = list(executor.map(self._generate, containers))
        else:
            generated = [self._generate(container) for container in containers]

        intervals = [interval for group in generated for interval in group]
        intervals.sort(key=lambda interval: interval.end)
        logger.info(
            f"Prepared {len(intervals)} intervals from {len(containers)} containers"
        )
        return intervals

    def optimal_plan_pair(self) -> PlanPair:
        """Run the DP and return the heaviest conflict-free plan pair."""
        decay_rate = self.config.decay_rate
        if not self.intervals:
            return PlanPair.empty(decay_rate)

        start_time = time.time()
        # including[i]: best plan pair whose latest interval is intervals[i]
        including: list[PlanPair] = []
        best = PlanPair.empty(decay_rate)
        for i, interval in enumerate(self.intervals):
            opt_pair = create_plan_pair(interval, decay_rate)
            opt_weight = opt_pair.total_weight
            for j in range(i):
                candidate = including[j].with_interval(interval)
                if candidate is None:
                    continue
                if candidate.total_weight > opt_weight:
                    opt_pair = candidate
                    opt_weight = candidate.total_weight
            including.append(opt_pair)
            if i == 0 or opt_weight > best.total_weight:
                best = opt_pair

        logger.info(
            f"Selected {len(best.primary.intervals)} primary and "
            f"{len(best.secondary.intervals)} secondary intervals "
            f"(weight {best.total_weight:.2f}) in {time.time() - start_time:.3f}s"
        )
        return best

    def schedule(self) -> list[TaggedInterval]:
        """Return the primary user's tagged schedule."""
        if not self.intervals:
            return []
        plan_pair = self.optimal_plan_pair()
        return tag_intervals(plan_pair.primary.chronological(), self.containers)


def schedule(
    config1: SchedulerData,
    config2: SchedulerData | None = None,
    *,
    now: datetime | None = None,
    config: SchedulerConfig | None = None,
) -> list[TaggedInterval]:
    """
    Compute the optimal schedule in the perspective of the primary user.

    Args:
        config1: Primary user's projects and events
        config2: Secondary user's projects and events, empty when omitted
        now: Current time; sampled from the clock when omitted
        config: Engine parameters

    Returns:
        Tagged intervals sorted by start time

    Raises:
        InvalidConfigurationError: If the records cannot be merged or expanded
        InternalConsistencyError: If an engine invariant is violated
    """
    return Scheduler(config1, config2, now=now, config=config).schedule()
