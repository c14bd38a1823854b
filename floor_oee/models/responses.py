"""
Floor OEE - API Response Models

This module defines Pydantic models for the engine views exposed by the API.
Metrics that are undefined for a period serialize as null, never as zero.
"""

from datetime import date as CalendarDate
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from floor_oee.models.intervals import (
    DailyMetrics, DowntimeBucket, EquipmentAverage, OverallAverage
)


class BaseResponseModel(BaseModel):
    """Base model for response payloads."""

    model_config = ConfigDict(from_attributes=True)


class DowntimeBucketResponse(BaseResponseModel):
    """Total down seconds for one equipment, day and reason."""
    equipment: int
    date: CalendarDate
    reason: str
    total_occurrence_seconds: int = Field(..., ge=0)

    @classmethod
    def from_bucket(cls, bucket: DowntimeBucket) -> "DowntimeBucketResponse":
        return cls(
            equipment=bucket.equipment_id,
            date=bucket.date,
            reason=bucket.reason,
            total_occurrence_seconds=bucket.total_seconds,
        )


class DailyMetricsResponse(BaseResponseModel):
    """Daily running/idle/down seconds, production sums and OEE factors."""
    equipment: int
    date: CalendarDate
    running: int
    idle: int
    down: int
    total_time: int
    sum_planned_duration: float
    sum_planned_quantity: float
    sum_actual_duration: float
    sum_actual_quantity: float
    sum_defect_quantity: float
    availability: Optional[float]
    performance: Optional[float]
    quality: Optional[float]
    oee: Optional[float]
    category: str

    @classmethod
    def from_metrics(cls, metrics: DailyMetrics) -> "DailyMetricsResponse":
        return cls(
            equipment=metrics.equipment_id,
            date=metrics.date,
            running=metrics.running,
            idle=metrics.idle,
            down=metrics.down,
            total_time=metrics.total_time,
            sum_planned_duration=metrics.sum_planned_duration,
            sum_planned_quantity=metrics.sum_planned_quantity,
            sum_actual_duration=metrics.sum_actual_duration,
            sum_actual_quantity=metrics.sum_actual_quantity,
            sum_defect_quantity=metrics.sum_defect_quantity,
            availability=metrics.availability,
            performance=metrics.performance,
            quality=metrics.quality,
            oee=metrics.oee,
            category=metrics.category or "No Data",
        )


class EquipmentAverageResponse(BaseResponseModel):
    """Average OEE factors for one equipment."""
    equipment: int
    avg_availability: Optional[float]
    avg_performance: Optional[float]
    avg_quality: Optional[float]
    oee: Optional[float]
    category: str

    @classmethod
    def from_average(cls, average: EquipmentAverage) -> "EquipmentAverageResponse":
        return cls(
            equipment=average.equipment_id,
            avg_availability=average.avg_availability,
            avg_performance=average.avg_performance,
            avg_quality=average.avg_quality,
            oee=average.oee,
            category=average.category,
        )


class OverallAverageResponse(BaseResponseModel):
    """Average OEE factors across all equipment."""
    availability: Optional[float]
    performance: Optional[float]
    quality: Optional[float]
    oee: Optional[float]
    category: str

    @classmethod
    def from_average(cls, average: OverallAverage) -> "OverallAverageResponse":
        return cls(
            availability=average.availability,
            performance=average.performance,
            quality=average.quality,
            oee=average.oee,
            category=average.category,
        )


class IngestionReportResponse(BaseResponseModel):
    """Counts of parsed, dropped and reconciled input records."""
    status_records_parsed: int
    manual_records_parsed: int
    production_records_parsed: int
    dropped: Dict[str, Dict[str, int]]
    intervals_retained: int
    intervals_overridden: int
    intervals_discarded: int
    chained_overlaps: int
