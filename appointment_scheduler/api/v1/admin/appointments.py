# ============================================================================
# FILE: appointment_scheduler/api/v1/admin/appointments.py
# Admin endpoints for viewing appointments and changing their status
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from appointment_scheduler.api.dependencies import get_db, require_admin
from appointment_scheduler.models.user import User
from appointment_scheduler.schemas.appointment import UpdateAppointmentStatusRequest
from appointment_scheduler.services.appointment.appointment_query_service import AppointmentQueryService
from appointment_scheduler.services.appointment.booking_service import BookingService
from appointment_scheduler.utils.timeutils import parse_date

router = APIRouter(prefix="/admin/appointments", tags=["Admin - Appointments"])


@router.get("")
async def list_appointments(
        status: Optional[str] = Query(None, description="Filter by status"),
        start_date: Optional[str] = Query(None, description="Appointments starting on or after this day (YYYY-MM-DD)"),
        end_date: Optional[str] = Query(None, description="Appointments starting on or before this day (YYYY-MM-DD)"),
        customer_id: Optional[UUID] = Query(None, description="Filter by customer"),
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(50, ge=1, le=200, description="Number of records to return"),
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """All appointments, most recent first, with customer details."""
    return AppointmentQueryService.list_appointments(
        db=db,
        status=status,
        start_date=parse_date(start_date, "start_date") if start_date else None,
        end_date=parse_date(end_date, "end_date") if end_date else None,
        customer_id=customer_id,
        skip=skip,
        limit=limit
    )


@router.put("/{appointment_id}/status")
async def update_appointment_status(
        request: UpdateAppointmentStatusRequest,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """Set any of the enumerated statuses. No transition rules are enforced."""
    appointment = BookingService.update_status(db, appointment_id, request.status)

    return {
        "message": "Appointment status updated successfully.",
        "appointment": AppointmentQueryService.serialize_appointment(appointment, include_customer=True)
    }
