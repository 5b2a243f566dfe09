"""Reminder scanning, email transport and the periodic Celery task."""
from datetime import datetime, timedelta, timezone

import pytest

from appointment_scheduler.config.settings import Settings
from appointment_scheduler.models import Appointment, AppointmentStatus, User
from appointment_scheduler.services.email import email_service
from appointment_scheduler.services.email.email_service import EmailService, build_reminder_message
from appointment_scheduler.services.reminder.reminder_service import ReminderScanner

from conftest import FakeNotifier, add_appointment

UTC = timezone.utc
NOW = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
TARGET = NOW + timedelta(hours=24)


def scanner_with(notifier):
    return ReminderScanner(notifier, lead_hours=24, window_minutes=15, business_name="Test Studio")


def test_window_is_inclusive_and_status_filtered(db, customer, notifier):
    due_edge_low = add_appointment(db, customer, TARGET - timedelta(minutes=15))
    due_edge_high = add_appointment(db, customer, TARGET + timedelta(minutes=15))
    due_confirmed = add_appointment(db, customer, TARGET + timedelta(minutes=5),
                                    status=AppointmentStatus.CONFIRMED.value)
    add_appointment(db, customer, TARGET - timedelta(minutes=16))
    add_appointment(db, customer, TARGET + timedelta(minutes=16))
    add_appointment(db, customer, TARGET, status=AppointmentStatus.CANCELLED_BY_CUSTOMER.value)
    add_appointment(db, customer, TARGET + timedelta(minutes=1), status=AppointmentStatus.COMPLETED.value)
    add_appointment(db, customer, TARGET + timedelta(minutes=10), reminder_sent=True)

    result = scanner_with(notifier).run(db, now=NOW)

    assert (result.found, result.sent, result.skipped, result.failed) == (3, 3, 0, 0)
    assert sorted(result.sent_ids) == sorted(str(a.id) for a in (due_edge_low, due_edge_high, due_confirmed))
    assert all(recipient == customer.email for recipient, _, _ in notifier.sent)
    assert "Test Studio" in notifier.sent[0][1]


def test_second_run_sends_nothing(db, customer, notifier):
    appointment = add_appointment(db, customer, TARGET)
    scanner = scanner_with(notifier)

    scanner.run(db, now=NOW)
    result = scanner.run(db, now=NOW)

    db.refresh(appointment)
    assert appointment.reminder_sent is True
    assert result.found == 0
    assert len(notifier.sent) == 1


def test_failed_send_is_counted_and_left_for_next_scan(db, customer, other_customer):
    failing = add_appointment(db, customer, TARGET)
    ok = add_appointment(db, other_customer, TARGET + timedelta(minutes=5))
    notifier = FakeNotifier(fail_for={customer.email})

    result = scanner_with(notifier).run(db, now=NOW)

    assert (result.sent, result.failed) == (1, 1)
    db.refresh(failing)
    db.refresh(ok)
    assert failing.reminder_sent is False
    assert ok.reminder_sent is True


def test_rejected_send_is_a_failure(db, customer):
    appointment = add_appointment(db, customer, TARGET)
    notifier = FakeNotifier(reject_for={customer.email})

    result = scanner_with(notifier).run(db, now=NOW)

    assert result.failed == 1
    db.refresh(appointment)
    assert appointment.reminder_sent is False


def test_customer_without_email_is_skipped(db, notifier):
    silent = User(name="No Mail", email="", hashed_password=None)
    db.add(silent)
    db.commit()
    appointment = add_appointment(db, silent, TARGET)

    result = scanner_with(notifier).run(db, now=NOW)

    assert (result.found, result.skipped, result.sent) == (1, 1, 0)
    db.refresh(appointment)
    assert appointment.reminder_sent is False
    assert notifier.sent == []


def test_lead_time_must_be_positive(notifier):
    with pytest.raises(ValueError):
        ReminderScanner(notifier, lead_hours=0)


def test_reminder_message_mentions_time_and_business():
    subject, body, html_content = build_reminder_message("Casey", TARGET, "Test Studio")

    assert subject == "Reminder: your appointment with Test Studio"
    assert "Hi Casey" in body
    assert "January 02, 2024 at 09:00 UTC" in body
    assert "Hi Casey" in html_content
    assert "January 02, 2024 at 09:00 UTC" in html_content


def test_reminder_html_escapes_names():
    _, body, html_content = build_reminder_message("<b>Casey</b>", TARGET, "Fish & Chips")

    assert "<b>Casey</b>" in body
    assert "&lt;b&gt;Casey&lt;/b&gt;" in html_content
    assert "Fish &amp; Chips" in html_content


def test_scanner_sends_html_alternative(db, customer, notifier):
    add_appointment(db, customer, TARGET)

    scanner_with(notifier).run(db, now=NOW)

    assert len(notifier.html) == 1
    assert "<html>" in notifier.html[0]
    assert "Test Studio" in notifier.html[0]


class FakeSMTP:
    instances = []

    def __init__(self, host, port):
        self.host, self.port = host, port
        self.calls = []
        FakeSMTP.instances.append(self)

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(("login", username))

    def sendmail(self, sender, recipients, message):
        self.message = message
        self.calls.append(("sendmail", sender, tuple(recipients)))

    def quit(self):
        self.calls.append("quit")


def test_email_service_sends_over_smtp(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)
    settings = Settings(
        EMAIL_HOST="smtp.test", EMAIL_PORT=2525, EMAIL_USE_TLS=True,
        EMAIL_USERNAME="mailer", EMAIL_PASSWORD="pw", EMAIL_FROM_ADDRESS="studio@example.com",
    )

    assert EmailService(settings).send("casey@example.com", "Hello", "Body") is True

    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.test", 2525)
    assert smtp.calls == [
        "starttls",
        ("login", "mailer"),
        ("sendmail", "studio@example.com", ("casey@example.com",)),
        "quit",
    ]


def test_email_service_attaches_html_part(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)
    settings = Settings(EMAIL_HOST="smtp.test", EMAIL_PORT=2525, EMAIL_USE_TLS=True,
                        EMAIL_FROM_ADDRESS="studio@example.com")

    EmailService(settings).send("casey@example.com", "Hello", "Plain body", html_content="<p>Rich body</p>")

    message = FakeSMTP.instances[0].message
    assert "text/plain" in message
    assert "text/html" in message
    assert "<p>Rich body</p>" in message

def test_celery_task_runs_a_scan(db, customer, monkeypatch):
    from appointment_scheduler.config.celery_config import celery_app
    from appointment_scheduler.tasks import reminder_tasks

    notifier = FakeNotifier()
    monkeypatch.setattr(
        reminder_tasks, "build_scanner",
        lambda settings=None: ReminderScanner(notifier, lead_hours=24)
    )
    soon = datetime.now(UTC) + timedelta(hours=24)
    add_appointment(db, customer, soon.replace(microsecond=0))

    result = reminder_tasks.send_appointment_reminders.apply().get()

    assert result == {"status": "success", "found": 1, "sent": 1, "skipped": 0, "failed": 0}
    db.expire_all()
    assert db.query(Appointment).one().reminder_sent is True

    schedule = celery_app.conf.beat_schedule["send-appointment-reminders"]
    assert schedule["task"] == "appointment_scheduler.tasks.reminder_tasks.send_appointment_reminders"
    assert schedule["schedule"] == 900.0
