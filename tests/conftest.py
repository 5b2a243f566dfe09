"""pytest configuration: in-memory database, API client and user fixtures."""
import os

# Must be set before the package reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date, datetime, time, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from appointment_scheduler.api.dependencies import create_access_token
from appointment_scheduler.config.database import SessionLocal, engine, get_db
from appointment_scheduler.main import app as fastapi_app
from appointment_scheduler.models import (
    Appointment,
    AppointmentStatus,
    AvailabilityRule,
    Base,
    BlockOutTime,
    UserRole,
)
from appointment_scheduler.services.user.user_service import UserService

UTC = timezone.utc

# Scenario anchor: 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)
BEFORE_MONDAY = datetime(2023, 12, 31, 12, 0, tzinfo=UTC)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=UTC)


def next_monday(weeks_ahead: int = 1) -> date:
    """A Monday at least `weeks_ahead` weeks in the future"""
    today = datetime.now(UTC).date()
    days = (7 - today.weekday()) % 7 or 7
    return today + timedelta(days=days + 7 * (weeks_ahead - 1))


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
def customer(db):
    return UserService.create_user(db, name="Casey Customer", email="casey@example.com", password="secret123")


@pytest.fixture
def other_customer(db):
    return UserService.create_user(db, name="Robin Other", email="robin@example.com", password="secret123")


@pytest.fixture
def admin(db):
    return UserService.create_user(
        db, name="Alex Admin", email="admin@example.com", password="secret123", role=UserRole.ADMIN
    )


def auth_headers(user) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def monday_rule(db):
    """Monday 09:00-10:00, 30 minute slots"""
    rule = AvailabilityRule(
        day_of_week=1,
        start_time=time(9, 0),
        end_time=time(10, 0),
        slot_duration_minutes=30,
        is_active=True,
    )
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


def add_appointment(db, customer, start: datetime, minutes: int = 30,
                    status: str = AppointmentStatus.SCHEDULED.value, reminder_sent: bool = False) -> Appointment:
    appointment = Appointment(
        customer_id=customer.id,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        status=status,
        reminder_sent=reminder_sent,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def add_block_out(db, start: datetime, end: datetime, reason: str = "Closed") -> BlockOutTime:
    block = BlockOutTime(start_time=start, end_time=end, reason=reason)
    db.add(block)
    db.commit()
    db.refresh(block)
    return block


class FakeNotifier:
    """Records reminders instead of sending them"""

    def __init__(self, fail_for=(), reject_for=()):
        self.sent = []
        self.html = []
        self.fail_for = set(fail_for)
        self.reject_for = set(reject_for)

    def send(self, recipient, subject, body, html_content=None):
        if recipient in self.fail_for:
            raise ConnectionError(f"SMTP down for {recipient}")
        if recipient in self.reject_for:
            return False
        self.sent.append((recipient, subject, body))
        self.html.append(html_content)
        return True


@pytest.fixture
def notifier():
    return FakeNotifier()
