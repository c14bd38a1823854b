"""
Floor OEE - Rollup Service

Rolls finalized daily metrics up to per-equipment averages and one overall
average. Each factor is averaged on its own over the values that are
defined, so a day missing only Performance still counts towards the
Availability and Quality averages. OEE at each level is the product of the
averaged factors.
"""

from typing import Dict, Iterable, List, Optional, Sequence

import structlog

from floor_oee.models.intervals import DailyMetrics, EquipmentAverage, OverallAverage
from floor_oee.services.oee_calculator import combine_oee, oee_category

logger = structlog.get_logger()


def mean_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    """Arithmetic mean of the non-null values, None if there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def rollup_equipment(daily: Iterable[DailyMetrics]) -> List[EquipmentAverage]:
    """One average per equipment that has any defined factor."""
    by_equipment: Dict[int, List[DailyMetrics]] = {}
    for metrics in daily:
        by_equipment.setdefault(metrics.equipment_id, []).append(metrics)

    averages = []
    for equipment_id, days in by_equipment.items():
        avg_a = mean_or_none(d.availability for d in days)
        avg_p = mean_or_none(d.performance for d in days)
        avg_q = mean_or_none(d.quality for d in days)
        if avg_a is None and avg_p is None and avg_q is None:
            logger.debug("Equipment has no defined OEE factors", equipment_id=equipment_id)
            continue

        oee = combine_oee(avg_a, avg_p, avg_q)
        averages.append(EquipmentAverage(
            equipment_id=equipment_id,
            avg_availability=avg_a,
            avg_performance=avg_p,
            avg_quality=avg_q,
            oee=oee,
            category=oee_category(oee),
        ))
    return averages


def rollup_overall(averages: Sequence[EquipmentAverage]) -> OverallAverage:
    """Average the equipment averages the same way days are averaged."""
    availability = mean_or_none(e.avg_availability for e in averages)
    performance = mean_or_none(e.avg_performance for e in averages)
    quality = mean_or_none(e.avg_quality for e in averages)
    oee = combine_oee(availability, performance, quality)
    return OverallAverage(
        availability=availability,
        performance=performance,
        quality=quality,
        oee=oee,
        category=oee_category(oee),
    )
