"""
Floor OEE - Plain-Text Report Formatter

Renders downtime buckets and daily OEE as pipe-separated text tables.
"""

from typing import Iterable

from floor_oee.models.intervals import DailyMetrics, DowntimeBucket
from floor_oee.services.oee_calculator import oee_category

DOWNTIME_HEADER = "Equipment | Date | Reason | Total Occurrence (sec)"
OEE_HEADER = "Equipment | Date | A | P | Q | OEE | Category"


def _ratio(value: float) -> str:
    return f"{value:.2f}".ljust(4)


def format_downtime_table(buckets: Iterable[DowntimeBucket]) -> str:
    lines = [DOWNTIME_HEADER, "-" * 45]
    for bucket in buckets:
        lines.append(
            f"{bucket.equipment_id} | {bucket.date.isoformat()} | {bucket.reason} | {bucket.total_seconds}"
        )
    return "\n".join(lines) + "\n"


def format_oee_table(daily: Iterable[DailyMetrics]) -> str:
    """Daily OEE table; days without a defined OEE are left out."""
    lines = [OEE_HEADER, "-" * 60]
    for metrics in daily:
        if metrics.oee is None:
            continue
        lines.append(" | ".join([
            str(metrics.equipment_id).ljust(2),
            metrics.date.isoformat(),
            _ratio(metrics.availability),
            _ratio(metrics.performance),
            _ratio(metrics.quality),
            _ratio(metrics.oee),
            oee_category(metrics.oee),
        ]))
    return "\n".join(lines) + "\n"
