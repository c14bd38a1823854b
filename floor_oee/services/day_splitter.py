"""
Floor OEE - Day Splitter Service

Decomposes an interval into calendar-day slices. Durations use whole-second
occupancy: an interval from s to e occupies (e - s) + 1 seconds. A slice ends
at 23:59:59 of its day or at the interval end, and the next slice begins one
second later, so slices are contiguous and their durations add up to the
inclusive duration of the interval.
"""

from datetime import datetime, time, timedelta
from typing import Dict, List

from floor_oee.models.intervals import DaySlice

ONE_SECOND = timedelta(seconds=1)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between start and end."""
    return int((end - start).total_seconds())


def inclusive_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds occupied by [start, end], both endpoints included."""
    return elapsed_seconds(start, end) + 1


def end_of_day(moment: datetime) -> datetime:
    """Last whole second of the calendar day containing moment."""
    return datetime.combine(moment.date(), time(23, 59, 59))


def split_by_day(start: datetime, end: datetime) -> List[DaySlice]:
    """
    Split [start, end] into one slice per calendar day touched.

    Each slice carries its proportion of the total inclusive duration.
    An interval inside a single day yields one slice with proportion 1.0.
    """
    if end < start:
        return []

    total = inclusive_seconds(start, end)
    slices = []
    cursor = start
    while cursor <= end:
        slice_end = min(end, end_of_day(cursor))
        seconds = inclusive_seconds(cursor, slice_end)
        slices.append(DaySlice(
            date=cursor.date(),
            start=cursor,
            end=slice_end,
            duration_seconds=seconds,
            proportion=seconds / total,
        ))
        if slice_end == end:
            break
        cursor = slice_end + ONE_SECOND
    return slices


def allocate(day_slice: DaySlice, **fields: float) -> Dict[str, float]:
    """Prorate each named quantity by the slice proportion."""
    return {name: value * day_slice.proportion for name, value in fields.items()}
