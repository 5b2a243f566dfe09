# ===== appointment_scheduler/tasks/reminder_tasks.py =====
import logging

from appointment_scheduler.config.celery_config import celery_app
from appointment_scheduler.config.database import SessionLocal
from appointment_scheduler.config.settings import get_settings
from appointment_scheduler.services.email.email_service import EmailService
from appointment_scheduler.services.reminder.reminder_service import ReminderScanner

logger = logging.getLogger(__name__)


def build_scanner(settings=None) -> ReminderScanner:
    settings = settings or get_settings()
    return ReminderScanner(
        notifier=EmailService(settings),
        lead_hours=settings.REMINDER_HOURS_BEFORE,
        window_minutes=settings.REMINDER_WINDOW_MINUTES,
        business_name=settings.BUSINESS_NAME,
    )


@celery_app.task(bind=True, max_retries=3)
def send_appointment_reminders(self):
    """
    Periodic reminder scan, triggered by Celery beat.

    Per-appointment send failures are handled inside the scanner; only a
    failure of the scan itself (e.g. the database is unreachable) is retried.
    """
    db = SessionLocal()
    try:
        result = build_scanner().run(db)
        logger.info(
            f"Reminder scan finished: found={result.found} sent={result.sent} "
            f"skipped={result.skipped} failed={result.failed}"
        )
        return {"status": "success", **result.to_dict()}

    except Exception as exc:
        db.rollback()
        logger.error(f"Reminder scan failed: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )

    finally:
        db.close()
