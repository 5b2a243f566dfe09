# ===== appointment_scheduler/services/availability/slot_generator.py =====
"""Candidate slot generation from weekly availability rules"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, Optional
from uuid import UUID

from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models.availability import AvailabilityRule
from appointment_scheduler.utils.timeutils import anchor, date_range, day_of_week


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime
    duration_minutes: int
    rule_id: Optional[UUID] = None


def iter_rule_slots(rule: AvailabilityRule, day: date) -> Iterator[Slot]:
    """
    Back-to-back slots for one rule on one UTC date.

    The first slot starts at the rule's start_time; generation stops before a
    slot would end after end_time. A window shorter than one slot yields nothing.
    """
    duration_minutes = rule.slot_duration_minutes
    if not duration_minutes or duration_minutes <= 0:
        raise ValidationError(
            f"Availability rule {rule.id} has a non-positive slot duration.",
            code="invalid_rule",
        )

    step = timedelta(minutes=duration_minutes)
    current = anchor(day, rule.start_time)
    limit = anchor(day, rule.end_time)

    while current + step <= limit:
        yield Slot(start=current, end=current + step, duration_minutes=duration_minutes, rule_id=rule.id)
        current += step


class CandidateSlots:
    """
    Lazy, restartable sequence of candidate slots for [start_date, end_date].

    Every active rule matching a date's weekday contributes its own grid;
    overlapping grids from different rules are not merged. Each iteration
    walks the range from the beginning again.
    """

    def __init__(self, rules: Iterable[AvailabilityRule], start_date: date, end_date: date):
        self.rules: List[AvailabilityRule] = [r for r in rules if r.is_active]
        self.start_date = start_date
        self.end_date = end_date

    def __iter__(self) -> Iterator[Slot]:
        for day in date_range(self.start_date, self.end_date):
            weekday = day_of_week(day)
            for rule in self.rules:
                if rule.day_of_week == weekday:
                    yield from iter_rule_slots(rule, day)

    def __repr__(self):
        return f"<CandidateSlots {self.start_date}..{self.end_date} rules={len(self.rules)}>"
