# ============================================================================
# appointment_scheduler/services/reminder/reminder_service.py
# ============================================================================
"""
Periodic reminder scan.

Finds upcoming appointments whose start falls inside a window around
now + lead time, sends one reminder each through the injected notifier and
marks them so later scans skip them.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Protocol
import logging

from sqlalchemy.orm import Session

from appointment_scheduler.models.appointment import Appointment, UPCOMING_STATUSES
from appointment_scheduler.services.email.email_service import build_reminder_message
from appointment_scheduler.utils.timeutils import format_instant, utcnow

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, recipient: str, subject: str, body: str, html_content: Optional[str] = None) -> bool:
        ...


@dataclass
class ReminderRunResult:
    found: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    sent_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "sent": self.sent,
            "skipped": self.skipped,
            "failed": self.failed,
        }


class ReminderScanner:
    """One reminder per appointment; a failed send leaves the row eligible for the next scan."""

    def __init__(self, notifier: Notifier, lead_hours: int, window_minutes: int = 15,
                 business_name: str = "Appointment Scheduler"):
        if lead_hours <= 0:
            raise ValueError("lead_hours must be positive")
        self.notifier = notifier
        self.lead = timedelta(hours=lead_hours)
        self.window = timedelta(minutes=window_minutes)
        self.business_name = business_name

    def window_for(self, now: datetime):
        target = now + self.lead
        return target - self.window, target + self.window

    def find_due(self, db: Session, now: datetime) -> List[Appointment]:
        window_start, window_end = self.window_for(now)
        return db.query(Appointment).filter(
            Appointment.status.in_(UPCOMING_STATUSES),
            Appointment.reminder_sent.is_(False),
            Appointment.start_time >= window_start,
            Appointment.start_time <= window_end
        ).order_by(Appointment.start_time.asc()).all()

    def run(self, db: Session, now: Optional[datetime] = None) -> ReminderRunResult:
        now = now or utcnow()
        result = ReminderRunResult()

        due = self.find_due(db, now)
        result.found = len(due)
        logger.info(f"Reminder scan at {format_instant(now)}: {result.found} appointment(s) due")

        for appointment in due:
            customer = appointment.customer
            if not customer or not customer.email:
                logger.warning(f"Skipping reminder for appointment {appointment.id}: customer has no email")
                result.skipped += 1
                continue

            subject, body, html_content = build_reminder_message(
                customer.name, appointment.start_time, self.business_name
            )

            try:
                delivered = self.notifier.send(customer.email, subject, body, html_content=html_content)
            except Exception as e:
                logger.error(f"Failed to send reminder for appointment {appointment.id}: {e}")
                result.failed += 1
                continue

            if not delivered:
                logger.error(f"Notifier rejected reminder for appointment {appointment.id}")
                result.failed += 1
                continue

            appointment.reminder_sent = True
            db.commit()

            result.sent += 1
            result.sent_ids.append(str(appointment.id))
            logger.info(f"Reminder sent for appointment {appointment.id} to {customer.email}")

        return result
