# ============================================================================
# FILE: appointment_scheduler/services/user/user_service.py
# User business logic - registration and authentication
# ============================================================================
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models.user import User, UserRole

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user operations."""

    @staticmethod
    def create_user(
            db: Session,
            name: str,
            email: str,
            password: str,
            role: UserRole = UserRole.CUSTOMER
    ) -> User:
        """
        Create a new user with hashed password.
        Raises ValidationError if email already exists.
        """
        email = email.lower().strip()

        if UserService.get_user_by_email(db, email):
            raise ValidationError("Email already in use.", code="email_taken")

        user = User(
            name=name.strip(),
            email=email,
            hashed_password=User.hash_password(password),
            role=role
        )

        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Email already in use.", code="email_taken")
        db.refresh(user)

        logger.info(f"User registered: {user.email} ({user.role.value})")
        return user

    @staticmethod
    def authenticate_user(
            db: Session,
            email: str,
            password: str
    ) -> Optional[User]:
        """
        Authenticate a user by email and password.
        Returns User if valid, None if invalid credentials.
        """
        user = UserService.get_user_by_email(db, email)

        if not user:
            return None

        if not user.verify_password(password):
            return None

        return user

    @staticmethod
    def get_user_by_id(
            db: Session,
            user_id: UUID
    ) -> Optional[User]:
        """Get a user by their ID."""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(
            db: Session,
            email: str
    ) -> Optional[User]:
        """Get a user by their email."""
        return db.query(User).filter(User.email == email.lower().strip()).first()

    @staticmethod
    def serialize_user(user: User) -> dict:
        return {
            "id": str(user.id),
            "name": user.name,
            "email": user.email,
            "role": user.role.value if isinstance(user.role, UserRole) else user.role,
        }
