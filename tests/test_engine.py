"""
End-to-end tests for the metrics engine, from raw records to rollups.
"""

from datetime import date

import pytest

from floor_oee.models.intervals import EquipmentStatus, StatusSource
from floor_oee.services.engine import MetricsEngine
from floor_oee.services.interval_parser import parse_status_records
from floor_oee.services.reconciler import reconcile
from tests.builders import production_record, status_record


class TestDowntimeScenarios:
    """Test downtime attribution end to end."""

    def test_auto_down_across_midnight(self):
        engine = MetricsEngine.build([
            status_record(1, "DOWN", "2024/01/01 23:00:00", "2024/01/02 01:00:00", "jam"),
        ])

        buckets = engine.downtime_buckets()

        assert [(b.equipment_id, b.date, b.reason) for b in buckets] == [
            (1, date(2024, 1, 1), "jam"),
            (1, date(2024, 1, 2), "jam"),
        ]
        for bucket in buckets:
            assert bucket.total_seconds / 60 == pytest.approx(60, abs=0.1)

    def test_manual_running_override_removes_downtime(self):
        auto = [status_record(2, "DOWN", "2024/01/01 10:00:00", "2024/01/01 12:00:00")]
        manual = [status_record(2, "RUNNING", "2024/01/01 10:30:00", "2024/01/01 11:30:00")]

        engine = MetricsEngine.build(auto, manual)

        assert engine.downtime_buckets() == []
        reconciled = reconcile(
            parse_status_records(auto, StatusSource.AUTO).items,
            parse_status_records(manual, StatusSource.MANUAL).items,
        ).intervals
        assert [(i.status, i.start.hour, i.end.hour) for i in reconciled] == [
            (EquipmentStatus.RUNNING, 10, 12)
        ]

    def test_interval_on_last_representable_day_does_not_abort_build(self):
        engine = MetricsEngine.build([
            status_record(1, "DOWN", "9999/12/31 23:00:00", "9999/12/31 23:59:59", "jam"),
            status_record(2, "DOWN", "2024/01/01 10:00:00", "2024/01/01 11:00:00", "power"),
        ])

        assert [(b.equipment_id, b.total_seconds) for b in engine.downtime_buckets()] == [
            (2, 3600),
            (1, 3599),
        ]


class TestOEEScenario:
    """Test a fully running single-day order end to end."""

    def test_single_day_order(self):
        engine = MetricsEngine.build(
            [status_record(5, "RUNNING", "2024/01/01 08:00:00", "2024/01/01 09:59:59")],
            [],
            [production_record(
                5, "2024/01/01 08:00:00", "2024/01/01 09:59:59",
                planned_duration=6480, planned=100, actual=90, defects=9,
            )],
        )

        [daily] = engine.daily_metrics()

        assert daily.availability == pytest.approx(1.0)
        assert daily.quality == pytest.approx(0.9)
        assert daily.oee == pytest.approx(daily.performance * 0.9)


class TestEngineViews:
    """Test the views built from the shared fixture data."""

    def test_downtime_buckets(self, engine):
        assert [(b.equipment_id, b.reason, b.total_seconds) for b in engine.downtime_buckets()] == [
            (3, "Status Down", 1800),
            (1, "jam", 3599),
            (1, "jam", 3600),
        ]

    def test_downtime_filter(self, engine):
        assert [b.equipment_id for b in engine.downtime_buckets(1)] == [1, 1]
        assert engine.downtime_buckets(99) == []

    def test_daily_metrics(self, engine):
        [daily] = engine.daily_metrics()

        assert daily.equipment_id == 3
        assert daily.date == date(2024, 1, 1)
        assert daily.running == 7200
        assert daily.down == 0
        assert daily.performance == pytest.approx(0.81)
        assert daily.oee == pytest.approx(0.729)
        assert daily.category == "Good"
        assert engine.daily_metrics(1) == []

    def test_equipment_and_overall(self, engine):
        [average] = engine.equipment_averages()
        overall = engine.overall_average()

        assert average.equipment_id == 3
        assert average.oee == pytest.approx(0.729)
        assert overall.oee == pytest.approx(0.729)
        assert overall.category == "Good"

    def test_ingestion_report(self, engine):
        report = engine.ingestion_report()

        assert report.status_records_parsed == 4
        assert report.manual_records_parsed == 1
        assert report.production_records_parsed == 1
        assert report.dropped == {
            "status_auto": {"parse_error": 1},
            "status_manual": {},
            "production": {"invalid_interval": 1},
        }
        assert report.intervals_retained == 4
        assert report.intervals_overridden == 1
        assert report.intervals_discarded == 0
        assert report.chained_overlaps == 0

    def test_returned_records_are_copies(self, engine):
        engine.downtime_buckets()[0].total_seconds = 0
        engine.daily_metrics()[0].running = 0

        assert engine.downtime_buckets()[0].total_seconds == 1800
        assert engine.daily_metrics()[0].running == 7200

    def test_empty_inputs(self):
        engine = MetricsEngine.build([])

        assert engine.downtime_buckets() == []
        assert engine.daily_metrics() == []
        assert engine.equipment_averages() == []
        assert engine.overall_average().category == "No Data"
