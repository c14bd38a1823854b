"""
Floor OEE - Engine Data Model

This module defines the typed records that flow through the reconciliation,
day-splitting and metrics-aggregation engine. Timestamps are naive local
wall-clock datetimes with whole-second resolution.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import NamedTuple, Optional


class EquipmentStatus(str, Enum):
    """Equipment status enumeration."""
    RUNNING = "RUNNING"
    IDLE = "IDLE"
    DOWN = "DOWN"
    OFFLINE = "OFFLINE"


class StatusSource(str, Enum):
    """Origin of a status interval."""
    AUTO = "auto"
    MANUAL = "manual"


@dataclass
class StatusInterval:
    """A status reported for one equipment between two timestamps."""
    equipment_id: int
    status: EquipmentStatus
    reason: Optional[str]
    start: datetime
    end: datetime
    source: StatusSource = StatusSource.AUTO

    def overlaps(self, other: "StatusInterval") -> bool:
        """Half-open overlap test against another interval."""
        return self.start < other.end and self.end > other.start

    def apply_override(self, manual: "StatusInterval") -> None:
        """Take status and reason from a manual record, keeping this span."""
        self.status = manual.status
        self.reason = manual.reason
        self.source = StatusSource.MANUAL

    def copy(self) -> "StatusInterval":
        return replace(self)


@dataclass(frozen=True)
class ProductionOrder:
    """A production order run on one equipment."""
    equipment_id: int
    start: datetime
    end: datetime
    planned_duration_seconds: float = 0.0
    planned_quantity: float = 0.0
    actual_quantity: float = 0.0
    defect_quantity: float = 0.0

    @property
    def duration_seconds(self) -> int:
        """Inclusive whole-second duration of the order."""
        return int((self.end - self.start).total_seconds()) + 1


@dataclass(frozen=True)
class DaySlice:
    """Portion of an interval bounded to a single calendar day."""
    date: date
    start: datetime
    end: datetime
    duration_seconds: int
    proportion: float


class DowntimeKey(NamedTuple):
    equipment_id: int
    date: date
    reason: str


@dataclass
class DowntimeBucket:
    """Accumulated down seconds for one (equipment, date, reason)."""
    equipment_id: int
    date: date
    reason: str
    total_seconds: int = 0


class DailyKey(NamedTuple):
    equipment_id: int
    date: date


@dataclass
class DailyMetrics:
    """Per-equipment, per-day accumulators and derived OEE factors."""
    equipment_id: int
    date: date
    running: int = 0
    idle: int = 0
    down: int = 0
    total_time: int = 0
    sum_planned_duration: float = 0.0
    sum_planned_quantity: float = 0.0
    sum_actual_duration: float = 0.0
    sum_actual_quantity: float = 0.0
    sum_defect_quantity: float = 0.0
    availability: Optional[float] = None
    performance: Optional[float] = None
    quality: Optional[float] = None
    oee: Optional[float] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class EquipmentAverage:
    """Mean of the non-null daily factors for one equipment."""
    equipment_id: int
    avg_availability: Optional[float]
    avg_performance: Optional[float]
    avg_quality: Optional[float]
    oee: Optional[float]
    category: str


@dataclass(frozen=True)
class OverallAverage:
    """Mean of the non-null equipment averages across all equipment."""
    availability: Optional[float]
    performance: Optional[float]
    quality: Optional[float]
    oee: Optional[float]
    category: str
