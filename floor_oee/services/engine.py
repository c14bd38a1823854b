"""
Floor OEE - Metrics Engine

Runs the full pipeline once over a snapshot of raw records:

    raw records -> parse -> reconcile -> downtime buckets
    reconciled intervals -> status window slicing -> daily OEE
        -> equipment averages -> overall average

The engine is immutable once built; every accessor hands back fresh copies
so callers can never alter the snapshot.
"""

import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

import structlog

from floor_oee.models.intervals import (
    DailyMetrics, DowntimeBucket, EquipmentAverage, OverallAverage, StatusSource
)
from floor_oee.services.downtime_aggregator import (
    DEFAULT_DOWNTIME_REASON, aggregate_downtime, filter_buckets
)
from floor_oee.services.interval_parser import (
    TIMESTAMP_FORMAT, dropped_summary, parse_production_records, parse_status_records
)
from floor_oee.services.oee_calculator import calculate_daily_metrics, filter_daily_metrics
from floor_oee.services.reconciler import reconcile
from floor_oee.services.rollup import rollup_equipment, rollup_overall
from floor_oee.services.status_window import StatusWindowSlicer
from floor_oee.utils.metrics import engine_build_seconds

logger = structlog.get_logger()

Records = Iterable[Mapping[str, Any]]


@dataclass(frozen=True)
class IngestionReport:
    """What happened to the input records while building the engine."""
    status_records_parsed: int
    manual_records_parsed: int
    production_records_parsed: int
    dropped: Dict[str, Dict[str, int]]
    intervals_retained: int
    intervals_overridden: int
    intervals_discarded: int
    chained_overlaps: int


class MetricsEngine:
    """Read-only snapshot of downtime and OEE results."""

    def __init__(
        self,
        downtime: List[DowntimeBucket],
        daily: List[DailyMetrics],
        equipment: List[EquipmentAverage],
        overall: OverallAverage,
        report: IngestionReport
    ):
        self._downtime = downtime
        self._daily = daily
        self._equipment = equipment
        self._overall = overall
        self._report = report

    @classmethod
    def build(
        cls,
        auto_records: Records,
        manual_records: Records = (),
        production_records: Records = (),
        timestamp_format: str = TIMESTAMP_FORMAT,
        default_reason: str = DEFAULT_DOWNTIME_REASON
    ) -> "MetricsEngine":
        """Parse, reconcile and aggregate the given raw records."""
        started = time.perf_counter()

        auto = parse_status_records(auto_records, StatusSource.AUTO, timestamp_format)
        manual = parse_status_records(manual_records, StatusSource.MANUAL, timestamp_format)
        orders = parse_production_records(production_records, timestamp_format)

        reconciled = reconcile(auto.items, manual.items)

        downtime = aggregate_downtime(reconciled.intervals, default_reason)
        slicer = StatusWindowSlicer(reconciled.intervals)
        daily = calculate_daily_metrics(orders.items, slicer)
        equipment = rollup_equipment(daily)
        overall = rollup_overall(equipment)

        report = IngestionReport(
            status_records_parsed=len(auto.items),
            manual_records_parsed=len(manual.items),
            production_records_parsed=len(orders.items),
            dropped=dropped_summary(auto, manual, orders),
            intervals_retained=reconciled.retained,
            intervals_overridden=reconciled.overridden,
            intervals_discarded=reconciled.discarded,
            chained_overlaps=reconciled.chained_overlaps,
        )

        elapsed = time.perf_counter() - started
        engine_build_seconds.observe(elapsed)
        logger.info(
            "Metrics engine built",
            downtime_buckets=len(downtime),
            daily_records=len(daily),
            equipment=len(equipment),
            overall_oee=overall.oee,
            elapsed_seconds=round(elapsed, 4),
        )
        return cls(downtime, daily, equipment, overall, report)

    def downtime_buckets(self, equipment_id: Optional[int] = None) -> List[DowntimeBucket]:
        return [replace(b) for b in filter_buckets(self._downtime, equipment_id)]

    def daily_metrics(self, equipment_id: Optional[int] = None) -> List[DailyMetrics]:
        return [replace(m) for m in filter_daily_metrics(self._daily, equipment_id)]

    def equipment_averages(self) -> List[EquipmentAverage]:
        return list(self._equipment)

    def overall_average(self) -> OverallAverage:
        return self._overall

    def ingestion_report(self) -> IngestionReport:
        return self._report
