# ===== appointment_scheduler/models/availability.py =====
from sqlalchemy import Column, String, Integer, Boolean, Time, Uuid, CheckConstraint
from sqlalchemy.sql import func
import uuid

from appointment_scheduler.models.base import Base, UTCDateTime


class AvailabilityRule(Base):
    """Weekly recurring availability window, cut into fixed-length slots"""
    __tablename__ = "availability_rules"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    day_of_week = Column(Integer, nullable=False, index=True)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    slot_duration_minutes = Column(Integer, nullable=False, default=30)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_rule_day_of_week"),
        CheckConstraint("start_time < end_time", name="ck_rule_window"),
        CheckConstraint("slot_duration_minutes > 0", name="ck_rule_duration"),
    )

    def __repr__(self):
        days = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        return (
            f"<AvailabilityRule {days[self.day_of_week]} {self.start_time}-{self.end_time} "
            f"every {self.slot_duration_minutes}m active={self.is_active}>"
        )


class BlockOutTime(Base):
    """One-off absolute interval during which nothing may be offered or booked"""
    __tablename__ = "block_out_times"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    start_time = Column(UTCDateTime, nullable=False, index=True)
    end_time = Column(UTCDateTime, nullable=False, index=True)
    reason = Column(String, nullable=True)  # "Holiday", "Team meeting", etc.

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_block_out_window"),
    )

    def __repr__(self):
        return f"<BlockOutTime {self.start_time} - {self.end_time} ({self.reason})>"
