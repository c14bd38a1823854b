"""
Floor OEE - Raw Input Record Models

This module defines Pydantic models for the raw status and production
records as they appear in the input JSON files, before timestamps are parsed.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseRecordModel(BaseModel):
    """Base model for raw input records."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class RawStatusRecord(BaseRecordModel):
    """Status record from the automated or manual-override feed."""
    equipment_id: int = Field(..., description="Equipment identifier")
    status: str = Field(..., min_length=1, description="RUNNING, IDLE, DOWN or OFFLINE")
    reason: Optional[str] = Field(None, description="Downtime reason")
    start_time: str = Field(..., description="Start timestamp, YYYY/MM/DD HH:mm:ss")
    end_time: str = Field(..., description="End timestamp, YYYY/MM/DD HH:mm:ss")

    @field_validator("status")
    @classmethod
    def normalize_status(cls, v):
        """Statuses are matched case-insensitively."""
        return v.upper()

    @field_validator("reason")
    @classmethod
    def blank_reason_is_none(cls, v):
        """An empty reason carries no attribution."""
        return v or None


class RawProductionRecord(BaseRecordModel):
    """Production order record."""
    equipment_id: int = Field(..., description="Equipment identifier")
    planned_duration_in_second: float = Field(0.0, ge=0, description="Planned duration in seconds")
    planned_quantity: float = Field(0.0, ge=0, description="Planned quantity")
    actual_quantity: float = Field(0.0, ge=0, description="Actual quantity")
    defect_quantity: float = Field(0.0, ge=0, description="Defect quantity")
    start_production: str = Field(..., description="Start timestamp, YYYY/MM/DD HH:mm:ss")
    finish_production: str = Field(..., description="Finish timestamp, YYYY/MM/DD HH:mm:ss")

    @field_validator(
        "planned_duration_in_second",
        "planned_quantity",
        "actual_quantity",
        "defect_quantity",
        mode="before",
    )
    @classmethod
    def missing_quantity_is_zero(cls, v):
        """Null or empty numeric fields count as zero."""
        if v is None or v == "":
            return 0.0
        return v
