# ============================================================================
# appointment_scheduler/services/appointment/appointment_query_service.py
# Read-side appointment logic - no FastAPI dependencies, fully testable
# ============================================================================
from sqlalchemy.orm import Session
from datetime import date, timedelta
from typing import Optional, Dict, Any, List
from uuid import UUID

from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models.appointment import Appointment, AppointmentStatus
from appointment_scheduler.utils.timeutils import format_instant, start_of_day


class AppointmentQueryService:
    """Service layer for appointment listings."""

    @staticmethod
    def list_customer_appointments(db: Session, customer_id: UUID) -> List[Dict[str, Any]]:
        """A customer's own appointments, soonest first."""
        appointments = db.query(Appointment).filter(
            Appointment.customer_id == customer_id
        ).order_by(Appointment.start_time.asc()).all()

        return [AppointmentQueryService.serialize_appointment(appt) for appt in appointments]

    @staticmethod
    def list_appointments(
            db: Session,
            status: Optional[str] = None,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            customer_id: Optional[UUID] = None,
            skip: int = 0,
            limit: int = 50
    ) -> Dict[str, Any]:
        """Admin listing with filters, most recent first."""
        if status and status not in AppointmentStatus.values():
            raise ValidationError(
                f"Invalid status filter. Allowed statuses: {', '.join(AppointmentStatus.values())}",
                code="invalid_status",
            )

        query = db.query(Appointment)

        if status:
            query = query.filter(Appointment.status == status)
        if customer_id:
            query = query.filter(Appointment.customer_id == customer_id)
        if start_date:
            query = query.filter(Appointment.start_time >= start_of_day(start_date))
        if end_date:
            query = query.filter(Appointment.start_time < start_of_day(end_date + timedelta(days=1)))

        query = query.order_by(Appointment.start_time.desc())
        total = query.count()
        appointments = query.offset(skip).limit(limit).all()

        return {
            "total_appointments": total,
            "page": {
                "skip": skip,
                "limit": limit,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0
            },
            "filters": {
                "status": status,
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
                "customer_id": str(customer_id) if customer_id else None
            },
            "appointments": [
                AppointmentQueryService.serialize_appointment(appt, include_customer=True)
                for appt in appointments
            ]
        }

    @staticmethod
    def serialize_appointment(appointment: Appointment, include_customer: bool = False) -> Dict[str, Any]:
        """Convert Appointment model to dictionary."""
        data = {
            "id": str(appointment.id),
            "customer_id": str(appointment.customer_id),
            "start_time": format_instant(appointment.start_time),
            "end_time": format_instant(appointment.end_time),
            "status": appointment.status,
            "notes": appointment.notes,
            "reminder_sent": appointment.reminder_sent,
            "created_at": format_instant(appointment.created_at) if appointment.created_at else None,
            "updated_at": format_instant(appointment.updated_at) if appointment.updated_at else None
        }

        if include_customer:
            customer = appointment.customer
            data["customer"] = {
                "id": str(customer.id),
                "name": customer.name,
                "email": customer.email
            } if customer else None

        return data
