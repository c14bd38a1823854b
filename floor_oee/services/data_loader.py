"""
Floor OEE - Data Loader Service

Reads the status, manual-override and production JSON files and builds the
metrics engine from them.
"""

import json
import os
from typing import Any, Dict, List

import structlog

from floor_oee.config import Settings
from floor_oee.services.engine import MetricsEngine
from floor_oee.utils.exceptions import DataSourceError

logger = structlog.get_logger()


def load_json_records(path: str) -> List[Dict[str, Any]]:
    """Read a JSON file holding an array of records."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        raise DataSourceError(path, "File not found")
    except (OSError, ValueError) as e:
        raise DataSourceError(path, "File could not be read", {"original_error": str(e)})

    if not isinstance(data, list):
        raise DataSourceError(path, "Expected a JSON array of records")

    logger.debug("Records loaded", path=path, count=len(data))
    return data


def load_engine(settings: Settings) -> MetricsEngine:
    """Build the engine from the files configured in settings."""
    status_path = settings.data_path(settings.STATUS_FILE)
    manual_path = settings.data_path(settings.MANUAL_STATUS_FILE)
    production_path = settings.data_path(settings.PRODUCTION_FILE)

    auto_records = load_json_records(status_path)
    if os.path.exists(manual_path):
        manual_records = load_json_records(manual_path)
    else:
        logger.warning("Manual status file not found, no overrides applied", path=manual_path)
        manual_records = []
    production_records = load_json_records(production_path)

    return MetricsEngine.build(
        auto_records,
        manual_records,
        production_records,
        timestamp_format=settings.TIMESTAMP_FORMAT,
        default_reason=settings.DEFAULT_DOWNTIME_REASON,
    )
