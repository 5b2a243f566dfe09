# ============================================================================
# FILE: appointment_scheduler/models/user.py
# Customers and admins; customers own appointments
# ============================================================================
from sqlalchemy import Column, String, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from passlib.context import CryptContext
import uuid
import enum

from appointment_scheduler.models.base import Base, UTCDateTime

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserRole(str, enum.Enum):
    """Platform-level user roles."""
    CUSTOMER = "customer"  # Books and cancels own appointments
    ADMIN = "admin"        # Manages rules, block-outs and appointment status


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)

    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.CUSTOMER,
        nullable=False,
        index=True
    )

    # Timestamps
    created_at = Column(UTCDateTime, server_default=func.now(), nullable=False)
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    appointments = relationship(
        "Appointment",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def verify_password(self, plain_password: str) -> bool:
        """Verify a plain password against the hashed password."""
        if not self.hashed_password:
            return False
        return pwd_context.verify(plain_password, self.hashed_password)

    @staticmethod
    def hash_password(plain_password: str) -> str:
        """Hash a plain password."""
        return pwd_context.hash(plain_password)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
