# appointment_scheduler/models/__init__.py
from .base import Base, UTCDateTime
from .user import User, UserRole
from .availability import AvailabilityRule, BlockOutTime
from .appointment import Appointment, AppointmentStatus, CANCELLED_STATUSES, UPCOMING_STATUSES

__all__ = [
    "Base",
    "UTCDateTime",
    "User",
    "UserRole",
    "AvailabilityRule",
    "BlockOutTime",
    "Appointment",
    "AppointmentStatus",
    "CANCELLED_STATUSES",
    "UPCOMING_STATUSES",
]
