"""
Unit tests for day splitting and proportional allocation.
"""

from datetime import date, datetime, timedelta

import pytest

from floor_oee.services.day_splitter import (
    allocate, elapsed_seconds, end_of_day, inclusive_seconds, split_by_day
)
from tests.builders import ts


class TestInclusiveSeconds:

    def test_counts_both_endpoints(self):
        assert inclusive_seconds(ts("2024/01/01 10:00:00"), ts("2024/01/01 10:00:59")) == 60

    def test_single_instant_is_one_second(self):
        assert inclusive_seconds(ts("2024/01/01 10:00:00"), ts("2024/01/01 10:00:00")) == 1

    def test_elapsed_excludes_the_end_second(self):
        assert elapsed_seconds(ts("2024/01/01 10:00:00"), ts("2024/01/01 10:00:59")) == 59

    def test_end_of_day(self):
        assert end_of_day(ts("2024/01/01 10:11:12")) == datetime(2024, 1, 1, 23, 59, 59)


class TestSplitByDay:
    """Test slice boundaries, completeness and proportions."""

    def test_single_day_yields_one_full_slice(self):
        slices = split_by_day(ts("2024/01/01 08:00:00"), ts("2024/01/01 16:00:00"))

        assert len(slices) == 1
        assert slices[0].date == date(2024, 1, 1)
        assert slices[0].proportion == 1.0
        assert slices[0].duration_seconds == 8 * 3600 + 1

    def test_midnight_split(self):
        slices = split_by_day(ts("2024/01/01 23:00:00"), ts("2024/01/02 01:00:00"))

        assert [(s.date, s.start, s.end) for s in slices] == [
            (date(2024, 1, 1), datetime(2024, 1, 1, 23), datetime(2024, 1, 1, 23, 59, 59)),
            (date(2024, 1, 2), datetime(2024, 1, 2, 0), datetime(2024, 1, 2, 1)),
        ]
        assert [s.duration_seconds for s in slices] == [3600, 3601]
        assert slices[0].proportion == pytest.approx(3600 / 7201)

    def test_multi_day_slices_are_contiguous_and_complete(self):
        start = ts("2024/01/01 12:00:00")
        end = ts("2024/01/04 06:30:00")

        slices = split_by_day(start, end)

        assert [s.date for s in slices] == [
            date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4)
        ]
        assert slices[0].start == start
        assert slices[-1].end == end
        for previous, following in zip(slices, slices[1:]):
            assert following.start == previous.end + timedelta(seconds=1)
        assert sum(s.duration_seconds for s in slices) == inclusive_seconds(start, end)
        assert sum(s.proportion for s in slices) == pytest.approx(1.0)
        assert slices[1].duration_seconds == 86400

    def test_interval_ending_at_midnight_keeps_its_last_second(self):
        start = ts("2024/01/01 23:00:00")
        end = ts("2024/01/02 00:00:00")

        slices = split_by_day(start, end)

        assert len(slices) == 2
        assert slices[-1].start == end
        assert slices[-1].end == end
        assert slices[-1].duration_seconds == 1
        assert sum(s.duration_seconds for s in slices) == inclusive_seconds(start, end)

    def test_interval_ending_on_last_representable_second(self):
        start = ts("9999/12/31 23:00:00")
        end = ts("9999/12/31 23:59:59")

        slices = split_by_day(start, end)

        assert len(slices) == 1
        assert slices[0].end == datetime.max.replace(microsecond=0)
        assert slices[0].duration_seconds == 3600

    def test_reversed_interval_yields_nothing(self):
        assert split_by_day(ts("2024/01/02 00:00:00"), ts("2024/01/01 00:00:00")) == []


class TestAllocate:
    """Test that prorated quantities are conserved across slices."""

    def test_allocations_sum_to_original(self):
        quantities = {
            "planned_duration": 14000.0,
            "planned_quantity": 100.0,
            "actual_quantity": 90.0,
            "defect_quantity": 9.0,
        }
        slices = split_by_day(ts("2024/01/01 22:00:00"), ts("2024/01/03 02:00:00"))

        shares = [allocate(s, **quantities) for s in slices]

        for name, value in quantities.items():
            assert sum(share[name] for share in shares) == pytest.approx(value)

    def test_allocation_follows_proportion(self):
        slices = split_by_day(ts("2024/01/01 22:00:00"), ts("2024/01/02 02:00:00"))

        first = allocate(slices[0], planned_quantity=14401.0)

        assert first["planned_quantity"] == pytest.approx(7200.0)
