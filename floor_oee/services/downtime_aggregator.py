"""
Floor OEE - Downtime Aggregation Service

Attributes reconciled DOWN time to (equipment, calendar day, reason) buckets.
Intervals spanning midnight are split by day first, and each day slice adds
its elapsed seconds (end - start) to exactly one bucket for that day. A
zero-length slice, such as the one produced by an interval ending exactly at
midnight, opens no bucket.
"""

from typing import Dict, Iterable, List, Optional

import structlog

from floor_oee.models.intervals import (
    DowntimeBucket, DowntimeKey, EquipmentStatus, StatusInterval
)
from floor_oee.services.day_splitter import elapsed_seconds, split_by_day

logger = structlog.get_logger()

DEFAULT_DOWNTIME_REASON = "Status Down"


class DowntimeAggregator:
    """Accumulates down seconds keyed by (equipment_id, date, reason)."""

    def __init__(self, default_reason: str = DEFAULT_DOWNTIME_REASON):
        self.default_reason = default_reason
        self.buckets: Dict[DowntimeKey, DowntimeBucket] = {}

    def add_interval(self, interval: StatusInterval) -> None:
        """Add one interval; anything other than DOWN is ignored."""
        if interval.status != EquipmentStatus.DOWN:
            return

        reason = interval.reason or self.default_reason
        for day_slice in split_by_day(interval.start, interval.end):
            seconds = elapsed_seconds(day_slice.start, day_slice.end)
            if seconds == 0:
                continue
            key = DowntimeKey(interval.equipment_id, day_slice.date, reason)
            bucket = self.buckets.get(key)
            if bucket is None:
                bucket = DowntimeBucket(
                    equipment_id=interval.equipment_id,
                    date=day_slice.date,
                    reason=reason,
                )
                self.buckets[key] = bucket
            bucket.total_seconds += seconds

    def aggregate(self, intervals: Iterable[StatusInterval]) -> List[DowntimeBucket]:
        for interval in intervals:
            self.add_interval(interval)

        logger.info(
            "Downtime aggregated",
            buckets=len(self.buckets),
            total_seconds=sum(b.total_seconds for b in self.buckets.values()),
        )
        return list(self.buckets.values())


def aggregate_downtime(
    intervals: Iterable[StatusInterval],
    default_reason: str = DEFAULT_DOWNTIME_REASON
) -> List[DowntimeBucket]:
    """Downtime buckets for a set of reconciled intervals, in first-seen order."""
    return DowntimeAggregator(default_reason).aggregate(intervals)


def filter_buckets(
    buckets: Iterable[DowntimeBucket],
    equipment_id: Optional[int] = None
) -> List[DowntimeBucket]:
    """Buckets for one equipment, or all of them when no filter is given."""
    if equipment_id is None:
        return list(buckets)
    return [b for b in buckets if b.equipment_id == equipment_id]
