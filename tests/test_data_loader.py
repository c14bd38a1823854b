"""
Tests for loading the input JSON files and building the engine from them.
"""

import json

import pytest

from floor_oee.config import Settings
from floor_oee.services.data_loader import load_engine, load_json_records
from floor_oee.utils.exceptions import DataSourceError
from tests.builders import production_record, status_record


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadJsonRecords:

    def test_reads_array(self, tmp_path):
        path = write_json(tmp_path / "status.json", [{"equipment_id": 1}])

        assert load_json_records(str(path)) == [{"equipment_id": 1}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceError) as exc_info:
            load_json_records(str(tmp_path / "missing.json"))

        assert exc_info.value.error_code == "DATA_SOURCE_ERROR"

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "status.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(DataSourceError):
            load_json_records(str(path))

    def test_non_array(self, tmp_path):
        path = write_json(tmp_path / "status.json", {"equipment_id": 1})

        with pytest.raises(DataSourceError):
            load_json_records(str(path))


class TestLoadEngine:
    """Test building the engine from the configured files."""

    def test_builds_from_data_directory(self, tmp_path, auto_records, manual_records, production_records):
        write_json(tmp_path / "status.json", auto_records)
        write_json(tmp_path / "manual_status.json", manual_records)
        write_json(tmp_path / "production.json", production_records)

        engine = load_engine(Settings(DATA_DIRECTORY=str(tmp_path)))

        assert len(engine.downtime_buckets()) == 3
        assert engine.ingestion_report().intervals_overridden == 1

    def test_missing_manual_file_means_no_overrides(self, tmp_path):
        write_json(tmp_path / "status.json", [
            status_record(2, "DOWN", "2024/01/01 10:00:00", "2024/01/01 12:00:00"),
        ])
        write_json(tmp_path / "production.json", [
            production_record(2, "2024/01/01 10:00:00", "2024/01/01 12:00:00", planned=1, actual=1),
        ])

        engine = load_engine(Settings(DATA_DIRECTORY=str(tmp_path)))

        assert engine.ingestion_report().manual_records_parsed == 0
        assert len(engine.downtime_buckets(2)) == 1

    def test_missing_production_file_raises(self, tmp_path):
        write_json(tmp_path / "status.json", [])

        with pytest.raises(DataSourceError):
            load_engine(Settings(DATA_DIRECTORY=str(tmp_path)))

    def test_configured_default_reason(self, tmp_path):
        write_json(tmp_path / "status.json", [
            status_record(2, "DOWN", "2024/01/01 10:00:00", "2024/01/01 12:00:00"),
        ])
        write_json(tmp_path / "production.json", [])

        engine = load_engine(Settings(DATA_DIRECTORY=str(tmp_path), DEFAULT_DOWNTIME_REASON="Unknown"))

        assert engine.downtime_buckets()[0].reason == "Unknown"
