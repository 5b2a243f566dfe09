# ===== appointment_scheduler/models/appointment.py =====
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Uuid, Index, CheckConstraint, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid

from appointment_scheduler.models.base import Base, UTCDateTime


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    PAID = "paid"
    CANCELLED_BY_ADMIN = "cancelled_by_admin"
    CANCELLED_BY_CUSTOMER = "cancelled_by_customer"

    @classmethod
    def values(cls):
        return [s.value for s in cls]


# Cancelled appointments free their slot; everything else holds it
CANCELLED_STATUSES = (
    AppointmentStatus.CANCELLED_BY_ADMIN.value,
    AppointmentStatus.CANCELLED_BY_CUSTOMER.value,
)
# Statuses a customer may cancel from, and that receive reminders
UPCOMING_STATUSES = (
    AppointmentStatus.SCHEDULED.value,
    AppointmentStatus.CONFIRMED.value,
)

_ACTIVE_SLOT_PREDICATE = text(
    "status NOT IN ('cancelled_by_admin', 'cancelled_by_customer')"
)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Appointment details
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(32), nullable=False, default=AppointmentStatus.SCHEDULED.value, index=True)

    # Reminders
    reminder_sent = Column(Boolean, nullable=False, default=False)

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("User", back_populates="appointments", lazy="joined")

    __table_args__ = (
        # One live appointment per start instant, enforced by the database itself
        Index(
            "uq_appointments_active_start_time",
            "start_time",
            unique=True,
            postgresql_where=_ACTIVE_SLOT_PREDICATE,
            sqlite_where=_ACTIVE_SLOT_PREDICATE,
        ),
        Index("ix_appointments_reminder_scan", "start_time", "status", "reminder_sent"),
        CheckConstraint("end_time > start_time", name="ck_appointment_window"),
    )

    def __repr__(self):
        return f"<Appointment {self.start_time} (Status: {self.status})>"
