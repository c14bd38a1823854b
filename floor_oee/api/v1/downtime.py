"""
Floor OEE - Downtime API

This module provides REST API endpoints for downtime attribution per
equipment, day and reason.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from floor_oee.api.dependencies import get_engine
from floor_oee.models.responses import DowntimeBucketResponse
from floor_oee.services.engine import MetricsEngine
from floor_oee.services.report_formatter import format_downtime_table
from floor_oee.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[DowntimeBucketResponse])
async def get_downtime_buckets(
    equipment: Optional[int] = Query(None, ge=1, description="Filter by equipment ID"),
    engine: MetricsEngine = Depends(get_engine)
) -> List[DowntimeBucketResponse]:
    """Get total down seconds per equipment, date and reason."""
    buckets = engine.downtime_buckets(equipment)

    logger.debug("Downtime buckets retrieved", equipment=equipment, count=len(buckets))

    return [DowntimeBucketResponse.from_bucket(b) for b in buckets]


@router.get("/report", response_class=PlainTextResponse)
async def get_downtime_report(
    equipment: Optional[int] = Query(None, ge=1, description="Filter by equipment ID"),
    engine: MetricsEngine = Depends(get_engine)
) -> PlainTextResponse:
    """Get downtime buckets as a plain-text table."""
    return PlainTextResponse(format_downtime_table(engine.downtime_buckets(equipment)))
