"""
Floor OEE - Interval Parser Service

This module converts raw status and production records into typed intervals.
Malformed records are dropped one at a time: each drop is logged, tallied on
the returned ParseResult and counted in Prometheus, and parsing continues.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, Iterable, List, Mapping, TypeVar

import structlog
from pydantic import ValidationError as PydanticValidationError

from floor_oee.models.intervals import (
    EquipmentStatus, ProductionOrder, StatusInterval, StatusSource
)
from floor_oee.models.records import RawProductionRecord, RawStatusRecord
from floor_oee.utils.exceptions import (
    InvalidIntervalError, ParseError, handle_validation_exception
)
from floor_oee.utils.metrics import records_dropped_total, records_parsed_total

logger = structlog.get_logger()

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

T = TypeVar("T")


@dataclass
class ParseResult(Generic[T]):
    """Parsed items plus a tally of dropped records by drop reason."""
    record_type: str
    items: List[T] = field(default_factory=list)
    dropped: Counter = field(default_factory=Counter)

    @property
    def dropped_total(self) -> int:
        return sum(self.dropped.values())

    def drop(self, index: int, error: Exception) -> None:
        reason = "invalid_interval" if isinstance(error, InvalidIntervalError) else "parse_error"
        self.dropped[reason] += 1
        records_dropped_total.labels(record_type=self.record_type, reason=reason).inc()
        logger.warning(
            "Input record dropped",
            record_type=self.record_type,
            index=index,
            reason=reason,
            error=str(error),
        )


def parse_timestamp(value: Any, fmt: str = TIMESTAMP_FORMAT) -> datetime:
    """Parse a wall-clock timestamp in the fixed input format."""
    if not isinstance(value, str):
        raise ParseError("Timestamp must be a string", {"value": repr(value)})
    try:
        return datetime.strptime(value.strip(), fmt)
    except ValueError as e:
        raise ParseError("Unparseable timestamp", {"value": value, "format": fmt, "original_error": str(e)})


def _parse_span(start_raw: str, end_raw: str, fmt: str):
    start = parse_timestamp(start_raw, fmt)
    end = parse_timestamp(end_raw, fmt)
    if end <= start:
        raise InvalidIntervalError(details={"start": start_raw, "end": end_raw})
    return start, end


def parse_status_record(
    record: Mapping[str, Any],
    source: StatusSource,
    fmt: str = TIMESTAMP_FORMAT
) -> StatusInterval:
    """Parse one raw status record, raising ParseError or InvalidIntervalError."""
    try:
        raw = RawStatusRecord.model_validate(record)
    except PydanticValidationError as e:
        raise handle_validation_exception(e)

    try:
        status = EquipmentStatus(raw.status)
    except ValueError:
        raise ParseError("Unknown equipment status", {"status": raw.status})

    start, end = _parse_span(raw.start_time, raw.end_time, fmt)
    return StatusInterval(
        equipment_id=raw.equipment_id,
        status=status,
        reason=raw.reason,
        start=start,
        end=end,
        source=source,
    )


def parse_production_record(record: Mapping[str, Any], fmt: str = TIMESTAMP_FORMAT) -> ProductionOrder:
    """Parse one raw production record, raising ParseError or InvalidIntervalError."""
    try:
        raw = RawProductionRecord.model_validate(record)
    except PydanticValidationError as e:
        raise handle_validation_exception(e)

    start, end = _parse_span(raw.start_production, raw.finish_production, fmt)
    return ProductionOrder(
        equipment_id=raw.equipment_id,
        start=start,
        end=end,
        planned_duration_seconds=raw.planned_duration_in_second,
        planned_quantity=raw.planned_quantity,
        actual_quantity=raw.actual_quantity,
        defect_quantity=raw.defect_quantity,
    )


def parse_status_records(
    records: Iterable[Mapping[str, Any]],
    source: StatusSource,
    fmt: str = TIMESTAMP_FORMAT
) -> ParseResult[StatusInterval]:
    """Parse a feed of status records, dropping the ones that fail."""
    result: ParseResult[StatusInterval] = ParseResult(record_type=f"status_{source.value}")
    for index, record in enumerate(records):
        try:
            result.items.append(parse_status_record(record, source, fmt))
        except (ParseError, InvalidIntervalError) as e:
            result.drop(index, e)

    records_parsed_total.labels(record_type=result.record_type).inc(len(result.items))
    logger.info(
        "Status records parsed",
        source=source.value,
        parsed=len(result.items),
        dropped=result.dropped_total,
    )
    return result


def parse_production_records(
    records: Iterable[Mapping[str, Any]],
    fmt: str = TIMESTAMP_FORMAT
) -> ParseResult[ProductionOrder]:
    """Parse production order records, dropping the ones that fail."""
    result: ParseResult[ProductionOrder] = ParseResult(record_type="production")
    for index, record in enumerate(records):
        try:
            result.items.append(parse_production_record(record, fmt))
        except (ParseError, InvalidIntervalError) as e:
            result.drop(index, e)

    records_parsed_total.labels(record_type=result.record_type).inc(len(result.items))
    logger.info(
        "Production records parsed",
        parsed=len(result.items),
        dropped=result.dropped_total,
    )
    return result


def dropped_summary(*results: ParseResult) -> Dict[str, Dict[str, int]]:
    """Drop tallies keyed by record type."""
    return {result.record_type: dict(result.dropped) for result in results}
