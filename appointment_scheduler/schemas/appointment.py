"""
Pydantic schemas for booking and appointment status requests
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class BookAppointmentRequest(BaseModel):
    """Request body for booking. start_time is a slot identifier from the availability listing."""
    start_time: str = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=2000)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "start_time": "2024-01-01T09:00:00+00:00",
            "notes": "First visit"
        }
    })


class UpdateAppointmentStatusRequest(BaseModel):
    """Admin status change; validated against the allowed statuses by the service"""
    status: str = Field(..., min_length=1)


class AppointmentActionResponse(BaseModel):
    """Result of a booking or cancellation"""
    message: str
    appointment: dict
