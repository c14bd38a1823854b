"""
Floor OEE - Source Reconciler Service

Merges the automated and the manually-corrected status feeds into one set of
intervals per equipment, with manual records taking priority on overlap.

Resolution rules:
- Candidates are scanned in start-time order (stable, automatic feed first).
- A candidate is tested against the already-retained intervals of the same
  equipment, in retention order, using half-open overlap.
- Only the first overlapping retained interval is acted upon. A manual
  candidate overwrites its status, reason and source; an automatic
  candidate is discarded.
- A retained interval keeps its own start and end; an override changes the
  classification only.

Because only the first match is considered, chains such as A overlaps B
overlaps C (A and C disjoint) give results that depend on processing order.
Such candidates are counted as chained overlaps and logged, not normalized.

When candidates arrive in start order, as they do through reconcile(), two
retained intervals can never both overlap a candidate, so the chained overlap
count stays at zero for file input. It only counts candidates passed to
SourceReconciler.add out of start order.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import structlog

from floor_oee.models.intervals import StatusInterval, StatusSource
from floor_oee.utils.metrics import intervals_overridden_total

logger = structlog.get_logger()


@dataclass
class ReconciliationResult:
    """Reconciled intervals and the counts of each resolution taken."""
    intervals: List[StatusInterval] = field(default_factory=list)
    overridden: int = 0
    discarded: int = 0
    chained_overlaps: int = 0

    @property
    def retained(self) -> int:
        return len(self.intervals)


class SourceReconciler:
    """Single-pass reconciliation over an arena of retained intervals."""

    def __init__(self):
        self._arena: List[StatusInterval] = []
        self._by_equipment: Dict[int, List[int]] = defaultdict(list)
        self._result = ReconciliationResult(intervals=self._arena)

    def _first_overlap(self, candidate: StatusInterval) -> Optional[int]:
        matches = [
            position for position in self._by_equipment[candidate.equipment_id]
            if candidate.overlaps(self._arena[position])
        ]
        if not matches:
            return None
        if len(matches) > 1:
            self._result.chained_overlaps += 1
            logger.warning(
                "Interval overlaps several retained intervals, resolving against the first",
                equipment_id=candidate.equipment_id,
                source=candidate.source.value,
                start=candidate.start.isoformat(),
                end=candidate.end.isoformat(),
                matches=len(matches),
            )
        return matches[0]

    def add(self, candidate: StatusInterval) -> None:
        """Retain, override with, or discard one candidate."""
        position = self._first_overlap(candidate)
        if position is None:
            self._by_equipment[candidate.equipment_id].append(len(self._arena))
            self._arena.append(candidate.copy())
            return

        if candidate.source == StatusSource.MANUAL:
            self._arena[position].apply_override(candidate)
            self._result.overridden += 1
            intervals_overridden_total.inc()
        else:
            self._result.discarded += 1

    def result(self) -> ReconciliationResult:
        return self._result


def merge_sources(
    auto: Iterable[StatusInterval],
    manual: Iterable[StatusInterval]
) -> List[StatusInterval]:
    """Both feeds in one list sorted by start; ties keep automatic first."""
    merged = list(auto) + list(manual)
    merged.sort(key=lambda interval: interval.start)
    return merged


def reconcile(
    auto: Iterable[StatusInterval],
    manual: Iterable[StatusInterval]
) -> ReconciliationResult:
    """Reconcile the automatic and manual feeds. Inputs are not mutated."""
    reconciler = SourceReconciler()
    for candidate in merge_sources(auto, manual):
        reconciler.add(candidate)

    result = reconciler.result()
    logger.info(
        "Status sources reconciled",
        retained=result.retained,
        overridden=result.overridden,
        discarded=result.discarded,
        chained_overlaps=result.chained_overlaps,
    )
    return result
