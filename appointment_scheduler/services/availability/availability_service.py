# ===== appointment_scheduler/services/availability/availability_service.py =====
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Set
import logging

from sqlalchemy.orm import Session

from appointment_scheduler.config.settings import get_settings
from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models.appointment import Appointment, CANCELLED_STATUSES
from appointment_scheduler.models.availability import AvailabilityRule, BlockOutTime
from appointment_scheduler.services.availability.slot_generator import CandidateSlots, Slot, iter_rule_slots
from appointment_scheduler.utils.timeutils import day_of_week, ensure_utc, format_instant, start_of_day, utcnow

logger = logging.getLogger(__name__)

# Slots starting sooner than this are never offered
BOOKING_LEAD_BUFFER = timedelta(minutes=5)


def is_booked(booked_starts: Set[datetime], start: datetime) -> bool:
    """Exact start-time conflict against live (non-cancelled) appointments"""
    return ensure_utc(start) in booked_starts


def overlaps_block_out(block_outs: Iterable[BlockOutTime], start: datetime, end: datetime) -> bool:
    """Half-open overlap: [start, end) and [b.start, b.end) share any instant"""
    return any(start < block.end_time and end > block.start_time for block in block_outs)


def resolve_slots(
        candidates: Iterable[Slot],
        booked_starts: Set[datetime],
        block_outs: Iterable[BlockOutTime],
        now: datetime
) -> List[datetime]:
    """
    Filter candidate slots down to bookable start instants.

    A slot is dropped when it starts inside the lead buffer, when a live
    appointment already starts at the same instant, or when it overlaps any
    block-out. The result is sorted chronologically; identical starts produced
    by different rules are kept.
    """
    earliest = ensure_utc(now) + BOOKING_LEAD_BUFFER
    block_outs = list(block_outs)

    bookable = [
        slot.start
        for slot in candidates
        if slot.start >= earliest
        and not is_booked(booked_starts, slot.start)
        and not overlaps_block_out(block_outs, slot.start, slot.end)
    ]
    bookable.sort()
    return bookable


class AvailabilityService:
    """Computes bookable slots on demand from rules, bookings and block-outs"""

    @staticmethod
    def get_active_rules(db: Session) -> List[AvailabilityRule]:
        return db.query(AvailabilityRule).filter(
            AvailabilityRule.is_active.is_(True),
            AvailabilityRule.slot_duration_minutes > 0
        ).order_by(
            AvailabilityRule.day_of_week.asc(),
            AvailabilityRule.start_time.asc(),
            AvailabilityRule.id.asc()
        ).all()

    @staticmethod
    def get_booked_starts(db: Session, window_start: datetime, window_end: datetime) -> Set[datetime]:
        """Start instants of non-cancelled appointments in [window_start, window_end)"""
        rows = db.query(Appointment.start_time).filter(
            Appointment.start_time >= window_start,
            Appointment.start_time < window_end,
            Appointment.status.notin_(CANCELLED_STATUSES)
        ).all()
        return {ensure_utc(row.start_time) for row in rows}

    @staticmethod
    def get_block_outs(db: Session, window_start: datetime, window_end: datetime) -> List[BlockOutTime]:
        """Block-outs overlapping [window_start, window_end)"""
        return db.query(BlockOutTime).filter(
            BlockOutTime.start_time < window_end,
            BlockOutTime.end_time > window_start
        ).order_by(BlockOutTime.start_time.asc()).all()

    @staticmethod
    def get_available_slots(
            db: Session,
            start_date: date,
            end_date: date,
            now: Optional[datetime] = None
    ) -> List[str]:
        """
        Bookable slot starts for the inclusive date range, as ISO 8601 strings.

        No active rules or an empty range (end before start) gives an empty list.
        """
        settings = get_settings()
        now = ensure_utc(now) if now else utcnow()

        if end_date < start_date:
            return []

        range_days = (end_date - start_date).days + 1
        if range_days > settings.MAX_AVAILABILITY_RANGE_DAYS:
            raise ValidationError(
                f"Date range too large: {range_days} days (max {settings.MAX_AVAILABILITY_RANGE_DAYS})."
            )

        rules = AvailabilityService.get_active_rules(db)
        if not rules:
            logger.info("No active availability rules found")
            return []

        window_start = start_of_day(start_date)
        window_end = start_of_day(end_date + timedelta(days=1))

        booked_starts = AvailabilityService.get_booked_starts(db, window_start, window_end)
        block_outs = AvailabilityService.get_block_outs(db, window_start, window_end)

        slots = resolve_slots(
            CandidateSlots(rules, start_date, end_date),
            booked_starts,
            block_outs,
            now
        )

        logger.info(
            f"Resolved {len(slots)} slots for {start_date}..{end_date} "
            f"(rules={len(rules)}, booked={len(booked_starts)}, block_outs={len(block_outs)})"
        )
        return [format_instant(s) for s in slots]

    @staticmethod
    def find_rule_slot(db: Session, start_time: datetime) -> Optional[Slot]:
        """
        The rule slot that starts exactly at start_time on its UTC date, if any.

        Only active rules for that weekday are considered; the first match in
        (start_time, id) order wins.
        """
        start_time = ensure_utc(start_time)
        day = start_time.date()
        for rule in AvailabilityService.get_active_rules(db):
            if rule.day_of_week != day_of_week(day):
                continue
            for slot in iter_rule_slots(rule, day):
                if slot.start == start_time:
                    return slot
                if slot.start > start_time:
                    break
        return None
