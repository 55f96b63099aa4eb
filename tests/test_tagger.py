"""
Tests for tagging and merging output intervals.
"""

from datetime import datetime, timedelta, UTC

import pytest

from joint_scheduler.exceptions import InternalConsistencyError
from joint_scheduler.intervals import AnnotatedInterval, IntervalContainer
from joint_scheduler.models import TaggedInterval, TaggedIntervalType
from joint_scheduler.tagger import merge_adjacent_intervals, tag_intervals

BASE = datetime(2026, 10, 19, 8, tzinfo=UTC)


def tagged(start_hour, end_hour, title="Essay", kind=TaggedIntervalType.PROJECT) -> TaggedInterval:
    return TaggedInterval(
        type=kind,
        title=title,
        start=BASE + timedelta(hours=start_hour),
        end=BASE + timedelta(hours=end_hour),
    )


def annotated(key, start_hour, end_hour) -> AnnotatedInterval:
    return AnnotatedInterval(
        key=key,
        start=BASE + timedelta(hours=start_hour),
        end=BASE + timedelta(hours=end_hour),
        weight=1,
        is_primary_user=True,
        is_group_project=False,
        max_full_weight_count=1,
    )


class TestMergeAdjacentIntervals:
    """Test cases for merge_adjacent_intervals."""

    def test_touching_same_subject_merged(self):
        merged = merge_adjacent_intervals([tagged(0, 2), tagged(2, 4), tagged(4, 5)])
        assert merged == [tagged(0, 5)]

    def test_gap_not_merged(self):
        intervals = [tagged(0, 2), tagged(3, 4)]
        assert merge_adjacent_intervals(intervals) == intervals

    def test_different_subject_not_merged(self):
        intervals = [
            tagged(0, 2),
            tagged(2, 4, title="Other"),
            tagged(4, 6, title="Other", kind=TaggedIntervalType.EVENT),
        ]
        assert merge_adjacent_intervals(intervals) == intervals

    def test_idempotent(self):
        intervals = [tagged(0, 2), tagged(2, 3), tagged(5, 6, title="Gym"), tagged(6, 7, title="Gym")]
        once = merge_adjacent_intervals(intervals)
        assert merge_adjacent_intervals(once) == once
        assert len(once) == 2

    def test_empty(self):
        assert merge_adjacent_intervals([]) == []


class TestTagIntervals:
    """Test cases for tag_intervals."""

    def test_tags_by_record_type(self, make_project, make_event):
        containers = {
            "p": IntervalContainer.for_project(make_project("p", title="Essay"), True),
            "e": IntervalContainer.for_event(make_event("e", title="Gym"), True),
        }
        result = tag_intervals(
            [annotated("e", 2, 3), annotated("p", 0, 1), annotated("p", 1, 2)], containers
        )

        assert result == [
            tagged(0, 2, title="Essay"),
            tagged(2, 3, title="Gym", kind=TaggedIntervalType.EVENT),
        ]

    def test_unknown_key_is_internal_error(self):
        with pytest.raises(InternalConsistencyError) as exc_info:
            tag_intervals([annotated("missing", 0, 1)], {})
        assert exc_info.value.error_code == "INTERNAL_CONSISTENCY"
