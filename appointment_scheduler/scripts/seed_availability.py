# ===== appointment_scheduler/scripts/seed_availability.py =====
"""
Seed a default working week: Monday to Friday, 09:00-17:00 UTC, 30 minute slots.

Usage:
    python -m appointment_scheduler.scripts.seed_availability
"""
from datetime import time

from appointment_scheduler.config.database import SessionLocal, create_tables
from appointment_scheduler.models.availability import AvailabilityRule

WEEKDAYS = range(1, 6)  # 1=Monday ... 5=Friday


def seed_availability():
    create_tables()
    db = SessionLocal()

    try:
        if db.query(AvailabilityRule).count():
            print("Availability rules already present, nothing to seed")
            return

        rules = [
            AvailabilityRule(
                day_of_week=day,
                start_time=time(9, 0),
                end_time=time(17, 0),
                slot_duration_minutes=30,
                is_active=True
            )
            for day in WEEKDAYS
        ]

        db.add_all(rules)
        db.commit()
        print(f"Seeded {len(rules)} availability rules")

    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_availability()
