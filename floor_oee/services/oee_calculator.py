"""
Floor OEE - OEE Calculator Service

This module computes daily OEE (Overall Equipment Effectiveness) per
equipment. OEE is calculated as Availability × Performance × Quality.

Each production order is split into calendar-day slices. Planned duration,
planned quantity, actual quantity and defect quantity are prorated by each
slice's share of the order, and the actual duration of a slice is its share
of the order's own inclusive duration. Running, idle and down seconds come
from the reconciled status intervals clipped to the slice window.

Where:
- Availability = (Running + Idle) / (Running + Idle + Down)
- Performance = Ideal Cycle Time / Actual Cycle Time, with
  Ideal Cycle Time = Planned Duration / Planned Quantity and
  Actual Cycle Time = Actual Duration / Actual Quantity
- Quality = (Actual Quantity - Defects) / Actual Quantity

A factor whose denominator is not positive is None. OEE is None unless all
three factors are defined.
"""

from typing import Dict, Iterable, List, Optional

import structlog

from floor_oee.models.intervals import DailyKey, DailyMetrics, ProductionOrder
from floor_oee.services.day_splitter import allocate, split_by_day
from floor_oee.services.status_window import StatusWindowSlicer

logger = structlog.get_logger()

NO_DATA = "No Data"

# Upper bound (inclusive) of each band, ascending
OEE_CATEGORY_BANDS = (
    (0.50, "Bad"),
    (0.60, "Minimum"),
    (0.75, "Good"),
    (0.85, "Recommended"),
)
OEE_TOP_CATEGORY = "Excellent"


def oee_category(oee: Optional[float]) -> str:
    """Qualitative label for an OEE value."""
    if oee is None:
        return NO_DATA
    for upper_bound, label in OEE_CATEGORY_BANDS:
        if oee <= upper_bound:
            return label
    return OEE_TOP_CATEGORY


def safe_ratio(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator, or None when the denominator is not positive."""
    if denominator <= 0:
        return None
    return numerator / denominator


def calculate_availability(metrics: DailyMetrics) -> Optional[float]:
    return safe_ratio(metrics.running + metrics.idle, metrics.total_time)


def calculate_performance(metrics: DailyMetrics) -> Optional[float]:
    if metrics.sum_planned_quantity <= 0 or metrics.sum_actual_quantity <= 0:
        return None
    ideal_cycle = metrics.sum_planned_duration / metrics.sum_planned_quantity
    actual_cycle = metrics.sum_actual_duration / metrics.sum_actual_quantity
    return safe_ratio(ideal_cycle, actual_cycle)


def calculate_quality(metrics: DailyMetrics) -> Optional[float]:
    return safe_ratio(
        metrics.sum_actual_quantity - metrics.sum_defect_quantity,
        metrics.sum_actual_quantity,
    )


def combine_oee(
    availability: Optional[float],
    performance: Optional[float],
    quality: Optional[float]
) -> Optional[float]:
    """A × P × Q, or None if any factor is undefined."""
    if availability is None or performance is None or quality is None:
        return None
    return availability * performance * quality


def finalize_metrics(metrics: DailyMetrics) -> DailyMetrics:
    """Derive A, P, Q, OEE and the category from the accumulated sums."""
    metrics.total_time = metrics.running + metrics.idle + metrics.down
    metrics.availability = calculate_availability(metrics)
    metrics.performance = calculate_performance(metrics)
    metrics.quality = calculate_quality(metrics)
    metrics.oee = combine_oee(metrics.availability, metrics.performance, metrics.quality)
    metrics.category = oee_category(metrics.oee)
    return metrics


class OEECalculator:
    """Accumulates production orders into daily metrics per equipment."""

    def __init__(self, slicer: StatusWindowSlicer):
        self.slicer = slicer
        self.daily: Dict[DailyKey, DailyMetrics] = {}
        self.skipped_orders = 0

    def _metrics_for(self, equipment_id: int, day) -> DailyMetrics:
        key = DailyKey(equipment_id, day)
        metrics = self.daily.get(key)
        if metrics is None:
            metrics = DailyMetrics(equipment_id=equipment_id, date=day)
            self.daily[key] = metrics
        return metrics

    def add_order(self, order: ProductionOrder) -> None:
        """Prorate one order over the days it spans."""
        if order.end <= order.start:
            self.skipped_orders += 1
            logger.warning(
                "Production order skipped, end is not after start",
                equipment_id=order.equipment_id,
                start=order.start.isoformat(),
                end=order.end.isoformat(),
            )
            return

        total_duration = order.duration_seconds
        for day_slice in split_by_day(order.start, order.end):
            shares = allocate(
                day_slice,
                planned_duration=order.planned_duration_seconds,
                actual_duration=total_duration,
                planned_quantity=order.planned_quantity,
                actual_quantity=order.actual_quantity,
                defect_quantity=order.defect_quantity,
            )
            durations = self.slicer.classify(order.equipment_id, day_slice.start, day_slice.end)

            metrics = self._metrics_for(order.equipment_id, day_slice.date)
            metrics.running += durations.running
            metrics.idle += durations.idle
            metrics.down += durations.down
            metrics.total_time += durations.total
            metrics.sum_planned_duration += shares["planned_duration"]
            metrics.sum_actual_duration += shares["actual_duration"]
            metrics.sum_planned_quantity += shares["planned_quantity"]
            metrics.sum_actual_quantity += shares["actual_quantity"]
            metrics.sum_defect_quantity += shares["defect_quantity"]

    def accumulate(self, orders: Iterable[ProductionOrder]) -> Dict[DailyKey, DailyMetrics]:
        for order in orders:
            self.add_order(order)
        return self.daily

    def finalize(self) -> List[DailyMetrics]:
        finalized = [finalize_metrics(metrics) for metrics in self.daily.values()]
        logger.info(
            "Daily OEE calculated",
            days=len(finalized),
            with_oee=sum(1 for m in finalized if m.oee is not None),
            skipped_orders=self.skipped_orders,
        )
        return finalized


def calculate_daily_metrics(
    orders: Iterable[ProductionOrder],
    slicer: StatusWindowSlicer
) -> List[DailyMetrics]:
    """Finalized daily metrics for a batch of production orders."""
    calculator = OEECalculator(slicer)
    calculator.accumulate(orders)
    return calculator.finalize()


def filter_daily_metrics(
    daily: Iterable[DailyMetrics],
    equipment_id: Optional[int] = None
) -> List[DailyMetrics]:
    if equipment_id is None:
        return list(daily)
    return [m for m in daily if m.equipment_id == equipment_id]
