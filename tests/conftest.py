"""
Shared fixtures for the Floor OEE test suite.
"""

import pytest

from floor_oee.services.engine import MetricsEngine
from tests.builders import production_record, status_record


@pytest.fixture
def auto_records():
    return [
        status_record(1, "DOWN", "2024/01/01 23:00:00", "2024/01/02 01:00:00", "jam"),
        status_record(2, "DOWN", "2024/01/01 10:00:00", "2024/01/01 12:00:00"),
        status_record(3, "RUNNING", "2024/01/01 08:00:00", "2024/01/01 09:59:59"),
        status_record(3, "DOWN", "2024/01/01 13:00:00", "2024/01/01 13:30:00"),
        status_record(3, "RUNNING", "bad timestamp", "2024/01/01 14:00:00"),
    ]


@pytest.fixture
def manual_records():
    return [
        status_record(2, "RUNNING", "2024/01/01 10:30:00", "2024/01/01 11:30:00"),
    ]


@pytest.fixture
def production_records():
    return [
        production_record(
            3, "2024/01/01 08:00:00", "2024/01/01 09:59:59",
            planned_duration=6480, planned=100, actual=90, defects=9,
        ),
        production_record(3, "2024/01/01 15:00:00", "2024/01/01 14:00:00", planned=10, actual=10),
    ]


@pytest.fixture
def engine(auto_records, manual_records, production_records):
    return MetricsEngine.build(auto_records, manual_records, production_records)
