"""
Celery worker entry point
Runs the periodic reminder scan; start beat alongside it:

    celery -A appointment_scheduler.worker.celery_app worker --beat
"""
import logging
from celery.signals import worker_ready, worker_shutdown

from appointment_scheduler.config.celery_config import celery_app
from appointment_scheduler.config.settings import get_settings
from appointment_scheduler.utils.my_logging import setup_logging

import appointment_scheduler.tasks.reminder_tasks  # noqa: F401  registers the task

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@worker_ready.connect
def worker_ready_handler(sender=None, **kwargs):
    """Handle worker startup"""
    logger.info("Celery worker ready")
    logger.info(f"Registered tasks: {sorted(name for name in celery_app.tasks if not name.startswith('celery.'))}")
    logger.info(
        f"Reminder scan every {settings.REMINDER_SCAN_INTERVAL_SECONDS}s, "
        f"{settings.REMINDER_HOURS_BEFORE}h ahead (+/- {settings.REMINDER_WINDOW_MINUTES}min)"
    )


@worker_shutdown.connect
def worker_shutdown_handler(sender=None, **kwargs):
    """Handle worker shutdown"""
    logger.info("Celery worker shutting down")


if __name__ == "__main__":
    celery_app.start([
        'worker',
        '--beat',
        '--loglevel=info',
        '--concurrency=2',
        '--max-tasks-per-child=1000'
    ])
