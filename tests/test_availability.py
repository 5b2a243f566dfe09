"""Availability resolution against bookings, block-outs and the lead buffer."""
from datetime import time, timedelta

import pytest

from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models import AppointmentStatus, AvailabilityRule, BlockOutTime
from appointment_scheduler.services.availability.availability_service import (
    AvailabilityService,
    is_booked,
    overlaps_block_out,
    resolve_slots,
)
from appointment_scheduler.services.availability.slot_generator import Slot
from appointment_scheduler.utils.timeutils import format_instant

from conftest import BEFORE_MONDAY, MONDAY, add_appointment, add_block_out, at


def iso(day, hour, minute=0):
    return format_instant(at(day, hour, minute))


def test_scenario_a_rule_only(db, monday_rule):
    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY)

    assert slots == [iso(MONDAY, 9, 0), iso(MONDAY, 9, 30)]


def test_scenario_b_booked_start_is_hidden(db, monday_rule, customer):
    add_appointment(db, customer, at(MONDAY, 9, 0))

    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY)

    assert slots == [iso(MONDAY, 9, 30)]


def test_cancelled_appointment_frees_its_slot(db, monday_rule, customer):
    add_appointment(db, customer, at(MONDAY, 9, 0), status=AppointmentStatus.CANCELLED_BY_CUSTOMER.value)

    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY)

    assert iso(MONDAY, 9, 0) in slots


def test_scenario_c_block_out_hides_overlapping_slots(db, monday_rule):
    add_block_out(db, at(MONDAY, 9, 15), at(MONDAY, 9, 45))

    assert AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY) == []


def test_block_out_touching_slot_edge_does_not_overlap(db, monday_rule):
    add_block_out(db, at(MONDAY, 9, 30), at(MONDAY, 10, 0))

    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY)

    assert slots == [iso(MONDAY, 9, 0)]


def test_lead_buffer_hides_imminent_slots(db, monday_rule):
    # 09:00 is only 4 minutes away, 09:30 is far enough
    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=at(MONDAY, 8, 56))
    assert slots == [iso(MONDAY, 9, 30)]

    # exactly five minutes ahead is still offered
    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=at(MONDAY, 8, 55))
    assert slots == [iso(MONDAY, 9, 0), iso(MONDAY, 9, 30)]


def test_query_is_idempotent(db, monday_rule, customer):
    add_appointment(db, customer, at(MONDAY + timedelta(days=7), 9, 0))
    end = MONDAY + timedelta(days=13)

    first = AvailabilityService.get_available_slots(db, MONDAY, end, now=BEFORE_MONDAY)
    second = AvailabilityService.get_available_slots(db, MONDAY, end, now=BEFORE_MONDAY)

    assert first == second
    assert first == sorted(first)
    assert len(first) == 3


def test_no_active_rules_gives_empty_list(db):
    db.add(AvailabilityRule(day_of_week=1, start_time=time(9), end_time=time(10),
                            slot_duration_minutes=30, is_active=False))
    db.commit()

    assert AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY) == []


def test_end_before_start_gives_empty_list(db, monday_rule):
    assert AvailabilityService.get_available_slots(
        db, MONDAY, MONDAY - timedelta(days=1), now=BEFORE_MONDAY
    ) == []


def test_range_too_large_is_rejected(db, monday_rule):
    with pytest.raises(ValidationError):
        AvailabilityService.get_available_slots(db, MONDAY, MONDAY + timedelta(days=400), now=BEFORE_MONDAY)


def test_overlapping_rules_keep_duplicate_starts(db, monday_rule):
    db.add(AvailabilityRule(day_of_week=1, start_time=time(9), end_time=time(10),
                            slot_duration_minutes=60, is_active=True))
    db.commit()

    slots = AvailabilityService.get_available_slots(db, MONDAY, MONDAY, now=BEFORE_MONDAY)

    assert slots == [iso(MONDAY, 9, 0), iso(MONDAY, 9, 0), iso(MONDAY, 9, 30)]


def test_resolve_slots_sorts_and_filters():
    later = Slot(start=at(MONDAY, 11), end=at(MONDAY, 11, 30), duration_minutes=30)
    earlier = Slot(start=at(MONDAY, 9), end=at(MONDAY, 9, 30), duration_minutes=30)
    booked = Slot(start=at(MONDAY, 10), end=at(MONDAY, 10, 30), duration_minutes=30)

    result = resolve_slots([later, booked, earlier], {at(MONDAY, 10)}, [], BEFORE_MONDAY)

    assert result == [at(MONDAY, 9), at(MONDAY, 11)]


def test_conflict_predicates():
    block = BlockOutTime(start_time=at(MONDAY, 9, 15), end_time=at(MONDAY, 9, 45))

    assert is_booked({at(MONDAY, 9)}, at(MONDAY, 9))
    assert not is_booked({at(MONDAY, 9)}, at(MONDAY, 9, 30))
    assert overlaps_block_out([block], at(MONDAY, 9), at(MONDAY, 9, 30))
    assert not overlaps_block_out([block], at(MONDAY, 8, 45), at(MONDAY, 9, 15))
    assert not overlaps_block_out([block], at(MONDAY, 9, 45), at(MONDAY, 10, 15))


def test_find_rule_slot_uses_the_matching_rule(db, monday_rule):
    afternoon = AvailabilityRule(day_of_week=1, start_time=time(13), end_time=time(15),
                                 slot_duration_minutes=60, is_active=True)
    db.add(afternoon)
    db.commit()

    slot = AvailabilityService.find_rule_slot(db, at(MONDAY, 14))

    assert slot.rule_id == afternoon.id
    assert slot.end == at(MONDAY, 15)
    assert AvailabilityService.find_rule_slot(db, at(MONDAY, 9, 15)) is None
    assert AvailabilityService.find_rule_slot(db, at(MONDAY + timedelta(days=1), 9)) is None
