"""
Pydantic schemas for availability rules and block-out times
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, time, timedelta
from uuid import UUID


# ============================================================================
# Availability rules
# ============================================================================

def _utc_time_of_day(v: Optional[time]) -> Optional[time]:
    """Rule times are UTC wall-clock values; accept a zero offset, reject any other"""
    if v is None or v.tzinfo is None:
        return v
    if v.utcoffset() != timedelta(0):
        raise ValueError("Time must be in UTC (no offset other than +00:00)")
    return v.replace(tzinfo=None)


class AvailabilityRuleCreate(BaseModel):
    """Weekly availability window. day_of_week: 0=Sunday ... 6=Saturday"""
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: time
    end_time: time
    slot_duration_minutes: int = Field(..., gt=0, description="Slot length in minutes")
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_utc_time(cls, v: time) -> time:
        return _utc_time_of_day(v)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "day_of_week": 1,
            "start_time": "09:00",
            "end_time": "17:00",
            "slot_duration_minutes": 30,
            "is_active": True
        }
    })


class AvailabilityRuleUpdate(BaseModel):
    """
    Partial update for an availability rule.
    All fields are optional - only send what you want to update.
    """
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    slot_duration_minutes: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_utc_time(cls, v: Optional[time]) -> Optional[time]:
        return _utc_time_of_day(v)


class AvailabilityRuleResponse(BaseModel):
    id: UUID
    day_of_week: int
    start_time: time
    end_time: time
    slot_duration_minutes: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Block-out times
# ============================================================================

class BlockOutTimeCreate(BaseModel):
    start_time: datetime
    end_time: datetime
    reason: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "start_time": "2024-12-25T00:00:00Z",
            "end_time": "2024-12-26T00:00:00Z",
            "reason": "Holiday"
        }
    })


class BlockOutTimeUpdate(BaseModel):
    """Partial update for a block-out; send reason=null to clear it"""
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    reason: Optional[str] = Field(None, max_length=255)


class BlockOutTimeResponse(BaseModel):
    id: UUID
    start_time: datetime
    end_time: datetime
    reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
