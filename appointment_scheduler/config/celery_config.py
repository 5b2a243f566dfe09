"""Celery configuration for background tasks."""
from celery import Celery

from appointment_scheduler.config.settings import get_settings

settings = get_settings()

# Task settings
task_serializer = "json"
accept_content = ["json"]
result_serializer = "json"
timezone = "UTC"
enable_utc = True

# Task execution settings
task_acks_late = True
worker_prefetch_multiplier = 1
result_expires = 3600  # 1 hour

# Beat settings (periodic tasks)
beat_schedule = {
    "send-appointment-reminders": {
        "task": "appointment_scheduler.tasks.reminder_tasks.send_appointment_reminders",
        "schedule": float(settings.REMINDER_SCAN_INTERVAL_SECONDS),
    },
}

# Logging
worker_log_format = "[%(asctime)s: %(levelname)s/%(processName)s] %(message)s"
worker_task_log_format = "[%(asctime)s: %(levelname)s/%(processName)s][%(task_name)s(%(task_id)s)] %(message)s"


def create_celery_app() -> Celery:
    """Create the Celery app bound to the broker/backend from settings"""
    app = Celery("appointment_scheduler")

    app.conf.broker_url = settings.CELERY_BROKER_URL
    app.conf.result_backend = settings.CELERY_RESULT_BACKEND

    app.conf.update(
        task_serializer=task_serializer,
        accept_content=accept_content,
        result_serializer=result_serializer,
        timezone=timezone,
        enable_utc=enable_utc,
        task_acks_late=task_acks_late,
        worker_prefetch_multiplier=worker_prefetch_multiplier,
        result_expires=result_expires,
        worker_log_format=worker_log_format,
        worker_task_log_format=worker_task_log_format,
        beat_schedule=beat_schedule,
    )

    app.autodiscover_tasks(["appointment_scheduler.tasks"], related_name="reminder_tasks")

    return app


celery_app = create_celery_app()
