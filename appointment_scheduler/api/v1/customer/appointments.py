# ============================================================================
# FILE: appointment_scheduler/api/v1/customer/appointments.py
# Customer-facing endpoints - thin HTTP layer over the scheduling services
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from appointment_scheduler.api.dependencies import get_db, get_current_user
from appointment_scheduler.models.user import User
from appointment_scheduler.schemas.appointment import AppointmentActionResponse, BookAppointmentRequest
from appointment_scheduler.services.appointment.appointment_query_service import AppointmentQueryService
from appointment_scheduler.services.appointment.booking_service import BookingService
from appointment_scheduler.services.availability.availability_service import AvailabilityService
from appointment_scheduler.utils.timeutils import parse_date, parse_instant

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("/available")
async def get_available_slots(
        start_date: Optional[str] = Query(None, description="First day, YYYY-MM-DD (UTC)"),
        end_date: Optional[str] = Query(None, description="Last day, YYYY-MM-DD (UTC), inclusive"),
        db: Session = Depends(get_db)
):
    """
    Bookable slot starts between start_date and end_date.
    Public; no authentication required.
    """
    start = parse_date(start_date, "start_date")
    end = parse_date(end_date, "end_date")

    slots = AvailabilityService.get_available_slots(db, start, end)
    return {"available_slots": slots}


@router.post("/book", response_model=AppointmentActionResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
        request: BookAppointmentRequest,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Book one of the slots returned by /available.
    Requires authenticated session.
    """
    start_time = parse_instant(request.start_time, "start_time")

    appointment = BookingService.book_appointment(
        db=db,
        customer_id=current_user.id,
        start_time=start_time,
        notes=request.notes
    )

    return {
        "message": "Appointment booked successfully.",
        "appointment": AppointmentQueryService.serialize_appointment(appointment)
    }


@router.get("/my")
async def list_my_appointments(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """The caller's appointments, soonest first."""
    return {
        "appointments": AppointmentQueryService.list_customer_appointments(db, current_user.id)
    }


@router.put("/{appointment_id}/cancel", response_model=AppointmentActionResponse)
async def cancel_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Cancel one of your own scheduled or confirmed appointments."""
    appointment = BookingService.cancel_appointment(db, appointment_id, current_user.id)

    return {
        "message": "Appointment cancelled successfully.",
        "appointment": AppointmentQueryService.serialize_appointment(appointment)
    }
