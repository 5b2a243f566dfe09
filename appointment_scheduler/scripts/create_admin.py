#!/usr/bin/env python3
"""
Bootstrap script to create the first admin user.
Run this once to set up your initial admin account.

Usage:
    python -m appointment_scheduler.scripts.create_admin
"""
import getpass
import logging

from sqlalchemy.orm import Session

from appointment_scheduler.config.database import SessionLocal, create_tables
from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models.user import UserRole
from appointment_scheduler.services.user.user_service import UserService
from appointment_scheduler.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)


def create_admin_user(name: str, email: str, password: str) -> None:
    db: Session = SessionLocal()
    try:
        existing_admin = UserService.get_user_by_email(db, email)
        if existing_admin:
            print(f"User already exists: {existing_admin.email} ({existing_admin.role.value})")
            return

        admin = UserService.create_user(db, name=name, email=email, password=password, role=UserRole.ADMIN)
        print(f"Admin user created: {admin.email}")
    finally:
        db.close()


def main():
    setup_logging()
    create_tables()

    print("Enter admin user details:")
    name = input("Name: ").strip()
    email = input("Email: ").strip()
    password = getpass.getpass("Password (min 6 chars): ").strip()

    if not name or not email:
        print("Error: name and email are required")
        return
    if len(password) < 6:
        print("Error: Password must be at least 6 characters")
        return

    try:
        create_admin_user(name, email, password)
    except ValidationError as e:
        print(f"Error: {e.message}")


if __name__ == "__main__":
    main()
