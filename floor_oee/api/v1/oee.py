"""
Floor OEE - OEE & Analytics API Routes

This module provides API endpoints for daily, per-equipment and overall OEE.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from floor_oee.api.dependencies import get_engine
from floor_oee.models.responses import (
    DailyMetricsResponse, EquipmentAverageResponse, IngestionReportResponse,
    OverallAverageResponse
)
from floor_oee.services.engine import MetricsEngine
from floor_oee.services.report_formatter import format_oee_table
from floor_oee.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_class=PlainTextResponse)
async def get_oee_report(engine: MetricsEngine = Depends(get_engine)) -> PlainTextResponse:
    """Get daily OEE as a plain-text table."""
    return PlainTextResponse(format_oee_table(engine.daily_metrics()))


@router.get("/daily", response_model=List[DailyMetricsResponse])
async def get_daily_oee(
    equipment: Optional[int] = Query(None, ge=1, description="Filter by equipment ID"),
    engine: MetricsEngine = Depends(get_engine)
) -> List[DailyMetricsResponse]:
    """Get daily running/idle/down time and OEE factors."""
    daily = engine.daily_metrics(equipment)

    logger.debug("Daily OEE retrieved", equipment=equipment, count=len(daily))

    return [DailyMetricsResponse.from_metrics(m) for m in daily]


@router.get("/equipment", response_model=List[EquipmentAverageResponse])
async def get_equipment_oee(engine: MetricsEngine = Depends(get_engine)) -> List[EquipmentAverageResponse]:
    """Get average OEE factors per equipment."""
    return [EquipmentAverageResponse.from_average(a) for a in engine.equipment_averages()]


@router.get("/overall", response_model=OverallAverageResponse)
async def get_overall_oee(engine: MetricsEngine = Depends(get_engine)) -> OverallAverageResponse:
    """Get average OEE factors across all equipment."""
    return OverallAverageResponse.from_average(engine.overall_average())


@router.get("/ingestion", response_model=IngestionReportResponse)
async def get_ingestion_report(engine: MetricsEngine = Depends(get_engine)) -> IngestionReportResponse:
    """Get parse, drop and reconciliation counts for the loaded data."""
    return IngestionReportResponse(**asdict(engine.ingestion_report()))
