"""
Floor OEE - Status Window Slicer

Clips reconciled status intervals to a time window and classifies the
clipped seconds as running, idle or down. OFFLINE time is left out of all
three totals.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List

from floor_oee.models.intervals import EquipmentStatus, StatusInterval
from floor_oee.services.day_splitter import inclusive_seconds


@dataclass
class StatusDurations:
    """Inclusive seconds per status class inside a window."""
    running: int = 0
    idle: int = 0
    down: int = 0

    @property
    def total(self) -> int:
        return self.running + self.idle + self.down


@dataclass(frozen=True)
class ClippedStatus:
    status: EquipmentStatus
    start: datetime
    end: datetime


class StatusWindowSlicer:
    """Per-equipment index over reconciled status intervals."""

    def __init__(self, intervals: Iterable[StatusInterval]):
        self._by_equipment: Dict[int, List[StatusInterval]] = defaultdict(list)
        for interval in intervals:
            self._by_equipment[interval.equipment_id].append(interval)

    def slice_window(
        self,
        equipment_id: int,
        window_start: datetime,
        window_end: datetime
    ) -> List[ClippedStatus]:
        """Intervals intersecting the window, clipped to its boundaries."""
        clipped = []
        for interval in self._by_equipment.get(equipment_id, ()):
            if interval.end > window_start and interval.start < window_end:
                clipped.append(ClippedStatus(
                    status=interval.status,
                    start=max(interval.start, window_start),
                    end=min(interval.end, window_end),
                ))
        return clipped

    def classify(
        self,
        equipment_id: int,
        window_start: datetime,
        window_end: datetime
    ) -> StatusDurations:
        durations = StatusDurations()
        for piece in self.slice_window(equipment_id, window_start, window_end):
            seconds = inclusive_seconds(piece.start, piece.end)
            if piece.status == EquipmentStatus.RUNNING:
                durations.running += seconds
            elif piece.status == EquipmentStatus.IDLE:
                durations.idle += seconds
            elif piece.status == EquipmentStatus.DOWN:
                durations.down += seconds
        return durations
