# ============================================================================
# appointment_scheduler/services/appointment/booking_service.py
# ============================================================================
"""Booking commit, customer cancellation and admin status changes"""
from datetime import datetime
from typing import Optional, Union
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from appointment_scheduler.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    SlotBlockedError,
    SlotTakenError,
    SlotUnavailableError,
    ValidationError,
)
from appointment_scheduler.models.appointment import Appointment, AppointmentStatus, UPCOMING_STATUSES
from appointment_scheduler.services.availability.availability_service import (
    AvailabilityService,
    is_booked,
    overlaps_block_out,
)
from appointment_scheduler.utils.timeutils import ensure_utc, format_instant, utcnow

logger = logging.getLogger(__name__)


class BookingService:
    """Handles appointment writes"""

    @staticmethod
    def get_appointment(db: Session, appointment_id: UUID) -> Appointment:
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise NotFoundError("Appointment not found.")
        return appointment

    @staticmethod
    def book_appointment(
            db: Session,
            customer_id: UUID,
            start_time: datetime,
            notes: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Re-validate and commit a single booking.

        Availability is re-checked against live rows, not a previous listing.
        The partial unique index on appointments.start_time settles races
        between concurrent requests: the loser's insert fails and is reported
        as a taken slot. A rejected request never leaves a row behind.
        """
        now = ensure_utc(now) if now else utcnow()
        start_time = ensure_utc(start_time)

        if start_time <= now:
            logger.info(f"Booking attempt in past: req={format_instant(start_time)} now={format_instant(now)}")
            raise ValidationError("Cannot book appointments in the past.", code="past_start_time")

        slot = AvailabilityService.find_rule_slot(db, start_time)
        if slot is None:
            logger.info(f"Booking rejected: {format_instant(start_time)} matches no active rule slot")
            raise SlotUnavailableError()

        end_time = slot.end

        booked_starts = AvailabilityService.get_booked_starts(db, start_time, end_time)
        if is_booked(booked_starts, start_time):
            logger.info(f"Booking conflict: existing appointment at {format_instant(start_time)}")
            raise SlotTakenError()

        block_outs = AvailabilityService.get_block_outs(db, start_time, end_time)
        if overlaps_block_out(block_outs, start_time, end_time):
            logger.info(f"Booking conflict: block-out overlaps {format_instant(start_time)}")
            raise SlotBlockedError()

        appointment = Appointment(
            customer_id=customer_id,
            start_time=start_time,
            end_time=end_time,
            status=AppointmentStatus.SCHEDULED.value,
            notes=notes,
            reminder_sent=False,
        )
        db.add(appointment)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Booking race lost for {format_instant(start_time)} (customer={customer_id})")
            raise SlotTakenError()

        db.refresh(appointment)
        logger.info(
            f"Appointment created: id={appointment.id} customer={customer_id} "
            f"start={format_instant(start_time)} duration={slot.duration_minutes}m"
        )
        return appointment

    @staticmethod
    def cancel_appointment(db: Session, appointment_id: UUID, customer_id: UUID) -> Appointment:
        """Customer cancellation: only the owner, only from scheduled/confirmed"""
        appointment = BookingService.get_appointment(db, appointment_id)

        if appointment.customer_id != customer_id:
            logger.info(f"Cancellation forbidden: customer {customer_id} does not own appointment {appointment_id}")
            raise AuthorizationError("You are not authorized to cancel this appointment.")

        if appointment.status not in UPCOMING_STATUSES:
            logger.info(f"Cancellation refused: appointment {appointment_id} status is '{appointment.status}'")
            raise ValidationError("This appointment cannot be cancelled.", code="cannot_cancel")

        appointment.status = AppointmentStatus.CANCELLED_BY_CUSTOMER.value
        db.commit()
        db.refresh(appointment)

        logger.info(f"Appointment {appointment_id} cancelled by customer {customer_id}")
        return appointment

    @staticmethod
    def update_status(
            db: Session,
            appointment_id: UUID,
            status: Union[str, AppointmentStatus]
    ) -> Appointment:
        """Admin status change: any enumerated status, no transition rules"""
        value = status.value if isinstance(status, AppointmentStatus) else status
        if value not in AppointmentStatus.values():
            raise ValidationError(
                f"Invalid status provided. Allowed statuses: {', '.join(AppointmentStatus.values())}",
                code="invalid_status",
            )

        appointment = BookingService.get_appointment(db, appointment_id)
        previous = appointment.status
        appointment.status = value

        try:
            db.commit()
        except IntegrityError:
            # Re-activating a cancelled appointment whose start was rebooked
            db.rollback()
            raise SlotTakenError("Another appointment already holds this time slot.")

        db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} status changed: {previous} -> {value}")
        return appointment
